"""CSV ingestion of participant lists."""

from .dialect import CsvDialect, detect_dialect
from .parser import (
    IngestionReport,
    is_valid_email,
    name_from_email,
    parse,
    parse_with_report,
)

__all__ = [
    "CsvDialect",
    "IngestionReport",
    "detect_dialect",
    "is_valid_email",
    "name_from_email",
    "parse",
    "parse_with_report",
]
