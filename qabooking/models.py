"""
Data model for the QA booking confirmation processor.

Every record here is frozen: a booking is extracted once per email and never
mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


PRODUCT_ID = "qa-booking-confirmation-processor"
EVENT_STATUS = "CONFIRMED"

UNKNOWN_BOOKING_NAME = "Unknown Booking Name ({source})"
UNKNOWN_REFERENCE_NUMBER = "Unknown Reference Number"

# (year, month, day, hour, minute)
DateComponents = Tuple[int, int, int, int, int]


class BusyStatus(str, Enum):
    FREE = "FREE"
    TENTATIVE = "TENTATIVE"
    BUSY = "BUSY"
    OOF = "OOF"

    @classmethod
    def parse(cls, value) -> "BusyStatus":
        """Accept a BusyStatus or its name in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown busy status '{value}' (expected one of: {choices})") from None


class DiagnosticKind(str, Enum):
    MALFORMED_DATE = "MALFORMED_DATE"
    UNKNOWN_SLOT = "UNKNOWN_SLOT"
    SERIALIZATION_FAILED = "SERIALIZATION_FAILED"
    READ_FAILED = "READ_FAILED"
    PROCESSING_FAILED = "PROCESSING_FAILED"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    source: str
    text: str
    message: str


@dataclass(frozen=True)
class FieldMatch:
    """Outcome of one extraction rule. ``value`` is None when nothing matched."""
    value: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.value is not None

    def or_default(self, default: str) -> str:
        return self.value if self.value is not None else default


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("Interval timestamps must carry a UTC offset")
        if self.end <= self.start:
            raise ValueError(f"Interval end {self.end.isoformat()} is not after start {self.start.isoformat()}")


@dataclass(frozen=True)
class BookingRecord:
    booking_name: str
    reference_number: str
    intervals: Tuple[Interval, ...] = ()

    def to_dict(self) -> dict:
        """JSON-friendly view, used for the extraction summary."""
        return {
            "booking_name": self.booking_name,
            "booking_reference_number": self.reference_number,
            "booking_dates": [
                {
                    "booking_start": interval.start.isoformat(),
                    "booking_end": interval.end.isoformat(),
                }
                for interval in self.intervals
            ],
        }


@dataclass(frozen=True)
class CalendarEvent:
    title: str
    description: str
    start: DateComponents
    end: DateComponents
    busy_status: BusyStatus
    status: str = EVENT_STATUS
    product_id: str = PRODUCT_ID


@dataclass(frozen=True)
class DocumentResult:
    source: str
    record: BookingRecord
    name_match: FieldMatch = FieldMatch()
    reference_match: FieldMatch = FieldMatch()
    diagnostics: Tuple[Diagnostic, ...] = ()


@dataclass
class BatchReport:
    """Outcome of one run over an emails directory."""
    results: List[DocumentResult] = field(default_factory=list)
    written_files: List[str] = field(default_factory=list)
    failures: List[Diagnostic] = field(default_factory=list)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        collected = [d for result in self.results for d in result.diagnostics]
        return collected + self.failures
