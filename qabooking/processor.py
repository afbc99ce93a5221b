#!/usr/bin/env python3
"""
QA Booking Confirmation Processor

Reads saved QA booking confirmation emails (.html/.htm) from a directory,
extracts the booking name, reference number and session slots from each one,
and writes one .ics calendar file per booking.

Usage:
    python3 -m qabooking

All options are collected interactively.
"""

import json
import os
import sys
from datetime import datetime

from .calendar_emitter import CalendarSerializationError, write_ics_file
from .email_reader import read_email_files
from .event_builder import build_events, extract_booking
from .models import BatchReport, Diagnostic, DiagnosticKind


class BookingProcessor:
    def __init__(self, config):
        self.config = config

    def log_with_timestamp(self, message, level="INFO"):
        """Log message with timestamp and immediate flush."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        print(f"[{timestamp}] [{level}] {message}", flush=True)

    def log_diagnostics(self, diagnostics, level="WARN"):
        for diagnostic in diagnostics:
            self.log_with_timestamp(f"⚠️  {diagnostic.message}", level)

    def process_single_email(self, document):
        """Extract the booking record from one email."""
        result = extract_booking(document.content, document.name)
        record = result.record

        self.log_with_timestamp(
            f"📧 {document.name}: '{record.booking_name}' "
            f"(ref {record.reference_number}, {len(record.intervals)} slot(s))"
        )
        self.log_diagnostics(result.diagnostics)
        return result

    def extract_all(self, documents, report):
        for document in documents:
            try:
                report.results.append(self.process_single_email(document))
            except Exception as e:
                failure = Diagnostic(
                    kind=DiagnosticKind.PROCESSING_FAILED,
                    source=document.name,
                    text=document.name,
                    message=f"Processing error for '{document.name}': {e}",
                )
                report.failures.append(failure)
                self.log_with_timestamp(f"✗ {failure.message}", "ERROR")

    def print_summary(self, report):
        """Print the extracted booking records as JSON."""
        print(json.dumps([result.record.to_dict() for result in report.results], indent=2), flush=True)

    def ensure_ics_dir(self):
        ics_dir = self.config.ics_dir
        if not os.path.exists(ics_dir):
            os.makedirs(ics_dir)
            self.log_with_timestamp(f"📁 Directory created: {ics_dir}")
        return ics_dir

    def create_ics_file(self, result, ics_dir):
        """
        Write the .ics file for one booking.

        Returns:
            Path of the written file, or None when the booking has no slots
        """
        record = result.record
        events = build_events(record, self.config.busy_status)
        if not events:
            self.log_with_timestamp(f"⏭️  No booking dates in '{result.source}', no ICS file created")
            return None

        ics_filepath = write_ics_file(events, record.booking_name, ics_dir)
        self.log_with_timestamp(f"✅ ICS file created: {ics_filepath}")
        return ics_filepath

    def create_ics_files(self, report):
        ics_dir = self.ensure_ics_dir()
        for result in report.results:
            try:
                ics_filepath = self.create_ics_file(result, ics_dir)
            except (CalendarSerializationError, OSError) as e:
                failure = Diagnostic(
                    kind=DiagnosticKind.SERIALIZATION_FAILED,
                    source=result.source,
                    text=result.record.booking_name,
                    message=f"Failed to create ICS file for '{result.record.booking_name}' ({result.source}): {e}",
                )
                report.failures.append(failure)
                self.log_with_timestamp(f"✗ {failure.message}", "ERROR")
                continue
            if ics_filepath:
                report.written_files.append(ics_filepath)

    def run(self):
        """Process every email in the configured directory."""
        report = BatchReport()
        self.log_with_timestamp(f"🔍 Reading emails from {self.config.emails_dir}")

        documents, read_failures = read_email_files(self.config.emails_dir)
        report.failures.extend(read_failures)
        self.log_diagnostics(read_failures, "ERROR")

        if not documents:
            self.log_with_timestamp("💤 No HTML files found in the specified directory.")
            return report

        self.log_with_timestamp(f"📦 Processing batch of {len(documents)} email(s)")
        self.extract_all(documents, report)
        self.print_summary(report)

        if not self.config.create_ics:
            self.log_with_timestamp("🏁 Exiting without creating ICS files.")
            return report

        self.create_ics_files(report)
        self.log_with_timestamp(
            f"📊 Batch complete: {len(report.written_files)} ICS file(s) written, "
            f"{len(report.diagnostics)} issue(s) reported"
        )
        return report


def main():
    from .prompts import ask_run_options

    try:
        config = ask_run_options()
    except KeyboardInterrupt:
        print("\n🛑 Cancelled.", flush=True)
        sys.exit(1)

    BookingProcessor(config).run()


if __name__ == '__main__':
    main()
