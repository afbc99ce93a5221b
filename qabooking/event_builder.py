"""
Booking record assembly and projection into calendar events.
"""

from datetime import timezone
from typing import List

from .booking_extractor import (
    booking_name_or_default,
    find_booking_name,
    find_reference_number,
    reference_number_or_default,
)
from .interval_resolver import resolve_intervals
from .models import BookingRecord, BusyStatus, CalendarEvent, DocumentResult
from .text_normalizer import normalize_text


def extract_booking(raw_html: str, source: str) -> DocumentResult:
    """Run one email through normalization, field extraction and interval resolution."""
    text = normalize_text(raw_html, source)

    name_match = find_booking_name(text)
    reference_match = find_reference_number(text)
    intervals, diagnostics = resolve_intervals(text, source)

    record = BookingRecord(
        booking_name=booking_name_or_default(name_match, source),
        reference_number=reference_number_or_default(reference_match),
        intervals=tuple(intervals),
    )
    return DocumentResult(
        source=source,
        record=record,
        name_match=name_match,
        reference_match=reference_match,
        diagnostics=tuple(diagnostics),
    )


def to_components(moment):
    utc = moment.astimezone(timezone.utc)
    return (utc.year, utc.month, utc.day, utc.hour, utc.minute)


def build_events(record: BookingRecord, busy_status) -> List[CalendarEvent]:
    """One CalendarEvent per interval of ``record``; empty when it has none."""
    status = BusyStatus.parse(busy_status)
    return [
        CalendarEvent(
            title=record.booking_name,
            description=f"Booking Reference Number: {record.reference_number}",
            start=to_components(interval.start),
            end=to_components(interval.end),
            busy_status=status,
        )
        for interval in record.intervals
    ]
