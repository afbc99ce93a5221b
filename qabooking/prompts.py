"""
Interactive collection of run options.
"""

import os

from rich.console import Console
from rich.prompt import Confirm, Prompt

from .config import DEFAULT_BUSY_STATUS, DEFAULT_EMAILS_DIR, DEFAULT_ICS_DIR, resolve_config
from .models import BusyStatus


console = Console()


def ask_existing_directory(message, default):
    """Ask for a directory, re-asking until an existing one is given."""
    directory = Prompt.ask(message, default=default, console=console)
    while not os.path.isdir(directory):
        console.print(f"[yellow]The directory does not exist: {directory}[/yellow]")
        directory = Prompt.ask("Please enter a valid emails directory", default=default, console=console)
    return directory


def ask_output_directory(message, default):
    """Ask for an output directory; it may not exist yet but must not be a file."""
    directory = Prompt.ask(message, default=default, console=console)
    while os.path.exists(directory) and not os.path.isdir(directory):
        console.print(f"[yellow]Not a directory: {directory}[/yellow]")
        directory = Prompt.ask("Please enter a valid ics directory", default=default, console=console)
    return directory


def ask_run_options():
    """
    Prompt for every run option and return a validated ProcessorConfig.

    Order: emails directory, confirmation to create calendar files, output
    directory (only when confirmed), busy status.
    """
    emails_dir = ask_existing_directory(
        "Enter the directory where your email files are located", DEFAULT_EMAILS_DIR
    )

    create_ics = Confirm.ask("Do you want to create ICS files for the bookings?", default=True, console=console)

    ics_dir = None
    if create_ics:
        ics_dir = ask_output_directory("Confirm the directory where ICS files will be saved", DEFAULT_ICS_DIR)

    busy_status = Prompt.ask(
        "Choose the busy status for the ICS files (OOF = Out Of Office)",
        choices=[status.value for status in BusyStatus],
        default=DEFAULT_BUSY_STATUS.value,
        console=console,
    )

    return resolve_config(emails_dir, create_ics=create_ics, ics_dir=ics_dir, busy_status=busy_status)
