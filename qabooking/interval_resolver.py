"""
Booking interval resolution.

Confirmation emails only state a start time ("01 March 2024 at 09:30") next to
a generic "N day(s)" duration that does not say how many hours the session
lasts. Sessions always run in one of two fixed slots, so the end time comes
from a closed slot table and the duration figure is not used.
"""

import re
from datetime import datetime, time, timezone
from typing import List, NamedTuple, Optional, Tuple

from .models import Diagnostic, DiagnosticKind, Interval


BOOKING_DATE_RE = re.compile(r"(\d{2} \w+ \d{4} at \d{2}:\d{2}).+?(\d+(?:\.\d+)?) day")
BOOKING_DATE_FORMAT = "%d %B %Y at %H:%M"

# start -> end, same day
KNOWN_SLOTS = {
    time(9, 30): time(12, 30),
    time(13, 30): time(16, 30),
}


class DateOccurrence(NamedTuple):
    date_text: str
    duration_text: str


def find_date_occurrences(text: str) -> List[DateOccurrence]:
    """All non-overlapping date + duration occurrences, left to right."""
    return [DateOccurrence(m.group(1), m.group(2)) for m in BOOKING_DATE_RE.finditer(text or "")]


def parse_booking_date(date_text: str) -> datetime:
    """Parse "DD Month YYYY at HH:MM" as a UTC timestamp. Raises ValueError."""
    return datetime.strptime(date_text, BOOKING_DATE_FORMAT).replace(tzinfo=timezone.utc)


def slot_end(start: datetime) -> Optional[datetime]:
    """End of the slot starting at ``start``, or None if no slot starts then."""
    end_time = KNOWN_SLOTS.get(time(start.hour, start.minute))
    if end_time is None:
        return None
    return start.replace(hour=end_time.hour, minute=end_time.minute, second=0, microsecond=0)


def resolve_intervals(text: str, source: str = "") -> Tuple[List[Interval], List[Diagnostic]]:
    """
    Turn every date + duration occurrence in ``text`` into an Interval.

    Occurrences with an unparseable date or a start time outside the known
    slots are skipped and reported in the returned diagnostics; they never
    stop the scan.

    Returns:
        Tuple of (intervals in order of appearance, diagnostics)
    """
    intervals = []
    diagnostics = []

    for occurrence in find_date_occurrences(text):
        try:
            start = parse_booking_date(occurrence.date_text)
        except ValueError:
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.MALFORMED_DATE,
                source=source,
                text=occurrence.date_text,
                message=f"Invalid date format for '{occurrence.date_text}' in file '{source}'",
            ))
            continue

        end = slot_end(start)
        if end is None:
            start_time = start.strftime("%H:%M")
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.UNKNOWN_SLOT,
                source=source,
                text=start_time,
                message=f"Unexpected start time '{start_time}' in file '{source}'",
            ))
            continue

        intervals.append(Interval(start=start, end=end))

    return intervals, diagnostics
