"""
QA Booking Confirmation Processor

Turns saved QA booking confirmation emails into calendar files.

Key Features:
- HTML email normalization (entity decoding, markup stripping)
- Booking name and reference number extraction with placeholder fallbacks
- Session slot resolution (09:30-12:30 and 13:30-16:30, UTC)
- One .ics file per booking, with a run-wide busy status
- Per-email fault isolation with collected diagnostics

Usage:
    from qabooking import extract_booking, build_events, serialize_events
    result = extract_booking(html, "confirmation.html")
    payload = serialize_events(build_events(result.record, "OOF"))

Or via command line:
    python3 -m qabooking
"""

__version__ = "1.0.0"

from .calendar_emitter import CalendarSerializationError, ics_filename, serialize_events, write_ics_file
from .config import ConfigError, ProcessorConfig, resolve_config
from .event_builder import build_events, extract_booking
from .models import BookingRecord, BusyStatus, CalendarEvent, Diagnostic, DiagnosticKind, Interval
from .processor import BookingProcessor

__all__ = [
    'BookingProcessor',
    'BookingRecord',
    'BusyStatus',
    'CalendarEvent',
    'CalendarSerializationError',
    'ConfigError',
    'Diagnostic',
    'DiagnosticKind',
    'Interval',
    'ProcessorConfig',
    'build_events',
    'extract_booking',
    'ics_filename',
    'resolve_config',
    'serialize_events',
    'write_ics_file',
]
