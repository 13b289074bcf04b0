"""Turn uploaded CSV text into an ordered list of participants.

Parsing is best-effort: a malformed row is skipped and counted, never raised.
The whole text is processed at once and the result depends only on the input,
so calling :func:`parse` twice on the same text yields the same list.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..models import Participant, ProcessingDetails, ValidationResults
from .dialect import CsvDialect, detect_dialect

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
FORM_EMAIL_FIELD = 1
_NAME_SEPARATORS = re.compile(r"[._-]")
_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class IngestionReport:
    """Participants parsed from a file together with audit information.

    Attributes
    ----------
    participants : tuple[Participant, ...]
        Accepted participants in file order.
    dialect : CsvDialect
        Layout detected from the first non-blank line.
    validation : ValidationResults
        Counts of processed, accepted, rejected and duplicate rows.
    notes : tuple[str, ...]
        Human-readable explanation of the parsing decisions.
    """

    participants: tuple[Participant, ...]
    dialect: CsvDialect
    validation: ValidationResults = field(default_factory=ValidationResults)
    notes: tuple[str, ...] = ()

    @property
    def source_info(self) -> str:
        v = self.validation
        return (
            f"{self.dialect.label}: {v.total_entries} data rows, "
            f"{len(self.participants)} participants loaded"
        )

    def to_processing_details(self) -> ProcessingDetails:
        return ProcessingDetails(
            dialect=self.dialect,
            source_info=self.source_info,
            parsing_notes=self.notes,
            validation=self.validation,
        )


def is_valid_email(value: str) -> bool:
    """Return ``True`` when ``value`` looks like ``local@domain.tld``."""
    return EMAIL_PATTERN.fullmatch(value) is not None


def name_from_email(email: str) -> str:
    """Build a display name from the local part of ``email``.

    ``.``, ``_`` and ``-`` separate words; every word is capitalised, so
    ``"mary_jane.o-neil@example.com"`` becomes ``"Mary Jane O Neil"``.
    """
    local_part = email.split("@", 1)[0]
    return " ".join(word.capitalize() for word in _NAME_SEPARATORS.split(local_part))


def split_quoted_line(line: str) -> list[str]:
    """Split one CSV line honouring double-quoted fields and ``""`` escapes."""
    row = next(csv.reader([line], skipinitialspace=True), [])
    return [value.strip() for value in row]


def _parse_simple_row(line: str) -> Optional[Participant]:
    # Only the first two fields are used; anything after the email is ignored.
    fields = [value.strip() for value in line.split(",")]
    if len(fields) < 2:
        return None
    name, email = fields[0], fields[1]
    if not name or not email:
        return None
    return Participant(name=name, email=email)


def _parse_form_row(line: str) -> Optional[Participant]:
    try:
        fields = split_quoted_line(line)
    except csv.Error:
        return None
    if len(fields) <= FORM_EMAIL_FIELD:
        return None
    email = fields[FORM_EMAIL_FIELD]
    if not is_valid_email(email):
        return None
    return Participant(name=name_from_email(email), email=email)


def _is_simple_header(line: str) -> bool:
    fields = [value.strip().lower() for value in line.split(",")]
    return len(fields) >= 2 and fields[0] == "name" and fields[1] == "email"


def parse_with_report(raw_text: str, *, deduplicate: bool = False) -> IngestionReport:
    """Parse ``raw_text`` and describe how the rows were interpreted.

    Parameters
    ----------
    raw_text : str
        Complete file contents. ``\\n``, ``\\r\\n`` and mixed line endings
        are accepted.
    deduplicate : bool, default: False
        When ``True`` a row whose email was already seen is dropped. When
        ``False`` duplicates are kept and only counted.

    Returns
    -------
    IngestionReport
        Accepted participants, the detected dialect, row counts and notes.
    """
    lines = [line.strip() for line in _LINE_BREAK.split(raw_text or "")]
    lines = [line for line in lines if line]
    header = lines[0] if lines else None
    dialect = detect_dialect(header)
    notes: list[str] = []

    if dialect is CsvDialect.FORM_EXPORT:
        notes.append(f"Detected form export header: {header}")
        notes.append("Header row skipped")
        notes.append(
            "Email read from column 2; names derived from the email local part"
        )
        data_lines = lines[1:]
        parse_row = _parse_form_row
    else:
        notes.append("Detected simple name,email format")
        data_lines = lines
        if header is not None and _is_simple_header(header):
            notes.append("Header row skipped")
            data_lines = lines[1:]
        parse_row = _parse_simple_row

    participants: list[Participant] = []
    seen_emails: set[str] = set()
    valid = duplicates_found = duplicates_removed = 0

    for line in data_lines:
        participant = parse_row(line)
        if participant is None:
            continue
        valid += 1
        if participant.email in seen_emails:
            duplicates_found += 1
            if deduplicate:
                duplicates_removed += 1
                continue
        seen_emails.add(participant.email)
        participants.append(participant)

    invalid = len(data_lines) - valid
    if invalid:
        notes.append(f"{invalid} row(s) skipped as invalid")
    if duplicates_found:
        if deduplicate:
            notes.append(f"{duplicates_removed} duplicate email(s) removed")
        else:
            notes.append(
                f"{duplicates_found} duplicate email(s) kept (de-duplication disabled)"
            )

    logger.debug(
        "Parsed %d participant(s) from %d row(s) as %s",
        len(participants),
        len(data_lines),
        dialect.value,
    )
    return IngestionReport(
        participants=tuple(participants),
        dialect=dialect,
        validation=ValidationResults(
            total_entries=len(data_lines),
            valid_entries=valid,
            invalid_entries=invalid,
            duplicates_found=duplicates_found,
            duplicates_removed=duplicates_removed,
        ),
        notes=tuple(notes),
    )


def parse(raw_text: str) -> list[Participant]:
    """Return the participants found in ``raw_text`` in file order."""
    return list(parse_with_report(raw_text).participants)


__all__ = [
    "EMAIL_PATTERN",
    "IngestionReport",
    "is_valid_email",
    "name_from_email",
    "parse",
    "parse_with_report",
    "split_quoted_line",
]
