"""
Loading saved confirmation emails from a directory.
"""

import os
import re
from typing import List, NamedTuple, Tuple

from .models import Diagnostic, DiagnosticKind


EMAIL_FILE_RE = re.compile(r"\.(html|htm)$", re.IGNORECASE)


class EmailDocument(NamedTuple):
    name: str
    content: str


def is_email_file(filename: str) -> bool:
    return bool(EMAIL_FILE_RE.search(filename))


def list_email_files(directory: str) -> List[str]:
    return sorted(
        name for name in os.listdir(directory)
        if is_email_file(name) and os.path.isfile(os.path.join(directory, name))
    )


def read_email_file(directory: str, name: str) -> EmailDocument:
    with open(os.path.join(directory, name), "r", encoding="utf-8") as f:
        return EmailDocument(name=name, content=f.read())


def read_email_files(directory: str) -> Tuple[List[EmailDocument], List[Diagnostic]]:
    """
    Read every .html/.htm file in ``directory`` as UTF-8 text.

    Files that cannot be read or decoded are skipped and reported as
    READ_FAILED diagnostics.

    Returns:
        Tuple of (documents in file name order, diagnostics)
    """
    documents = []
    failures = []
    for name in list_email_files(directory):
        try:
            documents.append(read_email_file(directory, name))
        except (OSError, UnicodeDecodeError) as e:
            failures.append(Diagnostic(
                kind=DiagnosticKind.READ_FAILED,
                source=name,
                text=name,
                message=f"Error reading email file '{name}': {e}",
            ))
    return documents, failures
