"""Detection of the CSV layout used by an uploaded participant file."""

from __future__ import annotations

import enum
from typing import Optional

FORM_EXPORT_MARKERS: tuple[str, ...] = ("Timestamp", "Email Address", "Email")
"""Case-sensitive header tokens that identify a form-export file."""


class CsvDialect(str, enum.Enum):
    """Supported participant file layouts."""

    SIMPLE = "simple"
    """One ``name,email`` pair per line."""

    FORM_EXPORT = "form-export"
    """Spreadsheet export of a web form: header row, timestamp, email, answers."""

    @property
    def label(self) -> str:
        if self is CsvDialect.FORM_EXPORT:
            return "Form export (e.g. Google Forms)"
        return "Simple CSV"


def detect_dialect(header_line: Optional[str]) -> CsvDialect:
    """Return the dialect implied by the first non-blank line of a file.

    Parameters
    ----------
    header_line : Optional[str]
        First non-blank line of the file, or ``None`` for an empty file.
    """
    if header_line and any(marker in header_line for marker in FORM_EXPORT_MARKERS):
        return CsvDialect.FORM_EXPORT
    return CsvDialect.SIMPLE


__all__ = ["CsvDialect", "FORM_EXPORT_MARKERS", "detect_dialect"]
