"""
iCalendar (.ics) serialization of booking calendar events.
"""

import hashlib
import os
import re
from datetime import datetime, timezone
from typing import List

from icalendar import Calendar, Event

from .models import BusyStatus, CalendarEvent, PRODUCT_ID


WHITESPACE_RUN_RE = re.compile(r"\s+")
ICS_EXTENSION = ".ics"


class CalendarSerializationError(Exception):
    """Raised when a booking's events cannot be turned into a valid calendar."""


def ics_filename(booking_name: str) -> str:
    return WHITESPACE_RUN_RE.sub("_", booking_name) + ICS_EXTENSION


def _to_datetime(components) -> datetime:
    try:
        return datetime(*components, tzinfo=timezone.utc)
    except (TypeError, ValueError) as e:
        raise CalendarSerializationError(f"Invalid date components {components!r}: {e}") from e


def _event_uid(event: CalendarEvent, start: datetime) -> str:
    uid_src = f"{event.title}|{event.description}|{start.isoformat()}"
    return hashlib.sha1(uid_src.encode("utf-8")).hexdigest() + "@" + PRODUCT_ID


def build_vevent(event: CalendarEvent, stamp: datetime) -> Event:
    start = _to_datetime(event.start)
    end = _to_datetime(event.end)
    if end <= start:
        raise CalendarSerializationError(
            f"Event '{event.title}' ends at {end.isoformat()}, not after its start {start.isoformat()}"
        )

    vevent = Event()
    vevent.add("uid", _event_uid(event, start))
    vevent.add("dtstamp", stamp)
    vevent.add("dtstart", start)
    vevent.add("dtend", end)
    vevent.add("summary", event.title)
    vevent.add("description", event.description)
    vevent.add("status", event.status)
    vevent.add("x-microsoft-cdo-busystatus", event.busy_status.value)
    vevent.add("transp", "TRANSPARENT" if event.busy_status == BusyStatus.FREE else "OPAQUE")
    return vevent


def serialize_events(events: List[CalendarEvent], stamp: datetime = None) -> bytes:
    """
    Build one VCALENDAR containing a VEVENT per event.

    Args:
        events: Events of a single booking, at least one
        stamp: DTSTAMP value, defaults to now (UTC)

    Returns:
        The .ics payload as bytes

    Raises:
        CalendarSerializationError: empty input, bad timestamps or a library failure
    """
    if not events:
        raise CalendarSerializationError("No events to serialize")

    stamp = stamp or datetime.now(timezone.utc).replace(microsecond=0)

    calendar = Calendar()
    calendar.add("prodid", f"-//{events[0].product_id}//EN")
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")

    for event in events:
        calendar.add_component(build_vevent(event, stamp))

    try:
        return calendar.to_ical()
    except Exception as e:
        raise CalendarSerializationError(f"Failed to serialize calendar: {e}") from e


def write_ics_file(events: List[CalendarEvent], booking_name: str, directory: str) -> str:
    """Serialize ``events`` and write them to ``directory``. Returns the file path."""
    payload = serialize_events(events)
    ics_filepath = os.path.join(directory, ics_filename(booking_name))
    with open(ics_filepath, "wb") as f:
        f.write(payload)
    return ics_filepath
