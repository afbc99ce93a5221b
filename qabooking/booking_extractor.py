"""
Pattern rules that pull the booking name and reference number out of the
normalized confirmation text.

Each rule is independent: a missing name never prevents the reference number
from being found, and vice versa. Absence is reported as an empty FieldMatch;
the human-readable placeholder strings are only produced when the booking
record is assembled.
"""

import re

from .models import FieldMatch, UNKNOWN_BOOKING_NAME, UNKNOWN_REFERENCE_NUMBER


BOOKING_NAME_RE = re.compile(r"QA Booking Confirmation for (.*?) Start Date:")
REFERENCE_NUMBER_RE = re.compile(r"reference number is (\d+)")


def _first_group(pattern, text) -> FieldMatch:
    match = pattern.search(text or "")
    if match:
        return FieldMatch(match.group(1))
    return FieldMatch()


def find_booking_name(text: str) -> FieldMatch:
    return _first_group(BOOKING_NAME_RE, text)


def find_reference_number(text: str) -> FieldMatch:
    return _first_group(REFERENCE_NUMBER_RE, text)


def booking_name_or_default(match: FieldMatch, source: str) -> str:
    return match.or_default(UNKNOWN_BOOKING_NAME.format(source=source))


def reference_number_or_default(match: FieldMatch) -> str:
    return match.or_default(UNKNOWN_REFERENCE_NUMBER)
