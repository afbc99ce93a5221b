"""
Tests for HTML email normalization.
"""

from qabooking import text_normalizer
from qabooking.text_normalizer import normalize_text


def wrap_body(body: str, head: str = "") -> str:
    """Helper to build a minimal HTML document."""
    return f"<html><head>{head}</head><body>{body}</body></html>"


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_paragraphs_joined_with_single_spaces(self):
        """Block elements and line breaks collapse into one spaced line."""
        html = wrap_body(
            "<p>QA Booking Confirmation for Jane Doe</p>\n"
            "<p>Start Date: 01 March 2024 at 09:30</p>\r\n"
            "<p>Duration: 1 day</p>"
        )

        result = normalize_text(html, "jane.html")

        assert result == (
            "QA Booking Confirmation for Jane Doe Start Date: 01 March 2024 at 09:30 Duration: 1 day"
        )

    def test_named_and_numeric_entities_decoded(self):
        """&amp; and &#39; come out as literal characters."""
        html = wrap_body("<p>Smith &amp; Sons&#39; booking</p>")

        result = normalize_text(html, "entities.html")

        assert "Smith & Sons' booking" in result

    def test_encoded_tags_are_stripped(self):
        """Entity-encoded markup is decoded first, then removed as markup."""
        html = wrap_body("<p>&lt;b&gt;Bold&lt;/b&gt; text</p>")

        result = normalize_text(html, "encoded.html")

        assert "Bold text" in result
        assert "<b>" not in result

    def test_emphasis_and_links_left_as_plain_text(self):
        """No Markdown markers or link targets leak into the text."""
        html = wrap_body('<p>QA Booking Confirmation for <b>Jane Doe</b> at <a href="https://example.com">the lab</a></p>')

        result = normalize_text(html, "markup.html")

        assert "QA Booking Confirmation for Jane Doe at the lab" in result
        assert "**" not in result
        assert "example.com" not in result

    def test_head_content_dropped(self):
        """Styles in the document head are not part of the body text."""
        html = wrap_body("<p>Body text</p>", head="<style>p { color: red; }</style>")

        result = normalize_text(html, "styled.html")

        assert "Body text" in result
        assert "color" not in result

    def test_whitespace_runs_collapsed(self):
        """Tabs, newlines and repeated spaces become one space."""
        html = wrap_body("<p>reference    number\t\tis\n\n12345</p>")

        result = normalize_text(html, "spaces.html")

        assert "reference number is 12345" in result

    def test_malformed_markup_is_best_effort(self):
        """Unclosed tags do not raise and the text survives."""
        html = "<html><body><p>unclosed <b>bold <div>reference number is 42"

        result = normalize_text(html, "broken.html")

        assert "unclosed" in result
        assert "reference number is 42" in result

    def test_empty_input(self):
        """Empty or missing content gives an empty string."""
        assert normalize_text("", "empty.html") == ""
        assert normalize_text(None, "none.html") == ""

    def test_converter_failure_falls_back_to_tag_stripping(self, monkeypatch, capsys):
        """A converter crash degrades to regex tag removal instead of raising."""
        def explode(text):
            raise RuntimeError("converter crashed")

        monkeypatch.setattr(text_normalizer, "strip_markup", explode)

        result = normalize_text(wrap_body("<p>reference number is 777</p>"), "crash.html")

        assert result == "reference number is 777"
        assert "crash.html" in capsys.readouterr().out
