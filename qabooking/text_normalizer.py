"""
HTML to single-line plain text conversion for booking confirmation emails.
"""

import html
import re

import html2text


LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
WHITESPACE_RE = re.compile(r"\s+")
TAG_RE = re.compile(r"<[^>]*>")


def _make_converter():
    """html2text converter tuned for plain text rather than Markdown."""
    converter = html2text.HTML2Text()
    converter.body_width = 0
    converter.ignore_links = True
    converter.ignore_images = True
    converter.ignore_emphasis = True
    converter.ignore_tables = True
    return converter


def strip_markup(text):
    return _make_converter().handle(text)


def normalize_text(raw_html, source=""):
    """
    Decode entities, drop markup and collapse whitespace into one line.

    Entities are decoded before the markup is parsed, so encoded tags such as
    ``&lt;b&gt;`` are treated as real tags. Never raises: if html2text chokes
    on the document, tags are removed with a regex instead.

    Args:
        raw_html: Raw HTML content of the email
        source: Identifier of the email (file name), used in error output

    Returns:
        The body text as a single space-separated line
    """
    decoded = html.unescape(raw_html or "")
    decoded = LINE_BREAK_RE.sub(" ", decoded)

    try:
        text = strip_markup(decoded)
    except Exception as e:
        print(f"Error converting HTML in '{source}', falling back to tag stripping: {e}", flush=True)
        text = TAG_RE.sub(" ", decoded)

    return WHITESPACE_RE.sub(" ", text).strip()
