"""
Tests for .ics serialization and file naming.
"""

from datetime import datetime, timezone

import pytest
from icalendar import Calendar

from qabooking.calendar_emitter import (
    CalendarSerializationError,
    ics_filename,
    serialize_events,
    write_ics_file,
)
from qabooking.models import BusyStatus, CalendarEvent


def make_event(start=(2024, 3, 1, 9, 30), end=(2024, 3, 1, 12, 30), busy_status=BusyStatus.OOF,
               title="Jane Doe", reference="12345") -> CalendarEvent:
    """Helper to create a CalendarEvent with sensible defaults."""
    return CalendarEvent(
        title=title,
        description=f"Booking Reference Number: {reference}",
        start=start,
        end=end,
        busy_status=busy_status,
    )


def vevents(payload: bytes):
    return [c for c in Calendar.from_ical(payload).walk() if c.name == "VEVENT"]


class TestIcsFilename:
    """Tests for ics_filename."""

    def test_whitespace_runs_become_single_underscores(self):
        assert ics_filename("Jane  Doe\tLab   Session") == "Jane_Doe_Lab_Session.ics"

    def test_other_characters_preserved(self):
        assert ics_filename("Unknown Booking Name (mail 1.html)") == "Unknown_Booking_Name_(mail_1.html).ics"

    def test_single_word(self):
        assert ics_filename("Lab-42") == "Lab-42.ics"


class TestSerializeEvents:
    """Tests for serialize_events."""

    def test_calendar_envelope(self):
        payload = serialize_events([make_event()])

        assert payload.startswith(b"BEGIN:VCALENDAR")
        assert b"VERSION:2.0" in payload
        assert b"PRODID:-//qa-booking-confirmation-processor//EN" in payload

    def test_event_properties(self):
        payload = serialize_events([make_event()])

        event = vevents(payload)[0]
        assert str(event.get("SUMMARY")) == "Jane Doe"
        assert str(event.get("DESCRIPTION")) == "Booking Reference Number: 12345"
        assert str(event.get("STATUS")) == "CONFIRMED"
        assert str(event.get("X-MICROSOFT-CDO-BUSYSTATUS")) == "OOF"
        assert str(event.get("TRANSP")) == "OPAQUE"
        assert event.get("DTSTART").dt == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert event.get("DTEND").dt == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)

    def test_times_written_in_utc(self):
        payload = serialize_events([make_event()])

        assert b"DTSTART:20240301T093000Z" in payload
        assert b"DTEND:20240301T123000Z" in payload

    def test_free_status_is_transparent(self):
        event = vevents(serialize_events([make_event(busy_status=BusyStatus.FREE)]))[0]

        assert str(event.get("TRANSP")) == "TRANSPARENT"

    def test_all_events_in_one_calendar(self):
        payload = serialize_events([
            make_event(),
            make_event(start=(2024, 3, 2, 13, 30), end=(2024, 3, 2, 16, 30)),
        ])

        events = vevents(payload)
        assert len(events) == 2
        assert events[0].get("UID") != events[1].get("UID")

    def test_uid_stable_across_runs(self):
        first = vevents(serialize_events([make_event()]))[0]
        second = vevents(serialize_events([make_event()]))[0]

        assert str(first.get("UID")) == str(second.get("UID"))

    def test_empty_event_list_rejected(self):
        with pytest.raises(CalendarSerializationError):
            serialize_events([])

    def test_end_before_start_rejected(self):
        with pytest.raises(CalendarSerializationError):
            serialize_events([make_event(start=(2024, 3, 1, 12, 30), end=(2024, 3, 1, 9, 30))])

    def test_invalid_components_rejected(self):
        with pytest.raises(CalendarSerializationError):
            serialize_events([make_event(start=(2024, 13, 1, 9, 30))])


class TestWriteIcsFile:
    """Tests for write_ics_file."""

    def test_file_written_under_booking_name(self, tmp_path):
        path = write_ics_file([make_event()], "Jane Doe", str(tmp_path))

        assert path == str(tmp_path / "Jane_Doe.ics")
        assert len(vevents((tmp_path / "Jane_Doe.ics").read_bytes())) == 1

    def test_nothing_written_on_failure(self, tmp_path):
        with pytest.raises(CalendarSerializationError):
            write_ics_file([], "Jane Doe", str(tmp_path))

        assert list(tmp_path.iterdir()) == []
