"""
Run configuration for the booking processor.

The interactive prompts only gather raw answers; ``resolve_config`` validates
them and produces the immutable ProcessorConfig the processor consumes.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .models import BusyStatus


DEFAULT_EMAILS_DIR = "./emails"
DEFAULT_ICS_DIR = "./ics"
DEFAULT_BUSY_STATUS = BusyStatus.OOF


class ConfigError(ValueError):
    """Raised when run options fail validation."""


@dataclass(frozen=True)
class ProcessorConfig:
    emails_dir: str
    busy_status: BusyStatus = DEFAULT_BUSY_STATUS
    create_ics: bool = True
    ics_dir: Optional[str] = DEFAULT_ICS_DIR


def resolve_config(emails_dir, create_ics=True, ics_dir=DEFAULT_ICS_DIR, busy_status=DEFAULT_BUSY_STATUS):
    """
    Validate raw run options.

    Args:
        emails_dir: Directory holding the saved .html/.htm emails, must exist
        create_ics: Whether calendar files should be written
        ics_dir: Output directory, created later if missing; ignored when
            create_ics is false
        busy_status: BusyStatus or its name (FREE, TENTATIVE, BUSY, OOF)

    Raises:
        ConfigError: if any option is invalid
    """
    emails_dir = (emails_dir or "").strip()
    if not emails_dir:
        raise ConfigError("Emails directory must not be empty")
    if not os.path.isdir(emails_dir):
        raise ConfigError(f"The directory does not exist: {emails_dir}")

    try:
        status = BusyStatus.parse(busy_status)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    create_ics = bool(create_ics)
    if create_ics:
        ics_dir = (ics_dir or "").strip()
        if not ics_dir:
            raise ConfigError("ICS output directory must not be empty")
        if os.path.exists(ics_dir) and not os.path.isdir(ics_dir):
            raise ConfigError(f"ICS output path is not a directory: {ics_dir}")
    else:
        ics_dir = None

    return ProcessorConfig(
        emails_dir=emails_dir,
        busy_status=status,
        create_ics=create_ics,
        ics_dir=ics_dir,
    )
