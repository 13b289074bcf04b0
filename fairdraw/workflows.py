from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import get_settings
from .draw.random_source import RandomSource
from .models import DrawResult
from .session import DrawSession


def draw_from_csv(
    raw_text: str,
    winner_count: Optional[int] = None,
    *,
    deduplicate: Optional[bool] = None,
    random_source: Optional[RandomSource] = None,
) -> DrawResult:
    """Parse ``raw_text`` and draw winners from it in one call.

    This function essentially wraps a throw-away :class:`DrawSession`, so the
    result carries the ingestion details of the text.

    Parameters
    ----------
    raw_text : str
        CSV contents in the simple or form-export layout.
    winner_count : Optional[int], default: None
        Number of winners; the configured default when omitted.
    deduplicate : Optional[bool], default: None
        Drop rows repeating an earlier email; the configured default when
        omitted.
    random_source : Optional[RandomSource], default: None
        Source of randomness; the system CSPRNG when omitted.

    Returns
    -------
    DrawResult
        The completed draw.

    Raises
    ------
    InvalidWinnerCountError, InsufficientParticipantsError
        If the parsed participants cannot satisfy ``winner_count``.
    """

    session = DrawSession(random_source=random_source, deduplicate=deduplicate)
    session.load_csv(raw_text)
    return session.draw(winner_count)


def read_csv_file(path: Union[str, Path], *, encoding: Optional[str] = None) -> str:
    """Read an uploaded CSV file as text.

    A UTF-8 byte order mark is dropped so the header detection sees the first
    real character.
    """
    encoding = encoding or get_settings().csv_encoding
    text = Path(path).read_text(encoding=encoding)
    return text.lstrip("\ufeff")


def draw_from_file(
    path: Union[str, Path],
    winner_count: Optional[int] = None,
    *,
    encoding: Optional[str] = None,
    deduplicate: Optional[bool] = None,
    random_source: Optional[RandomSource] = None,
) -> DrawResult:
    """Read the CSV file at ``path`` and delegate to :func:`draw_from_csv`."""
    return draw_from_csv(
        read_csv_file(path, encoding=encoding),
        winner_count,
        deduplicate=deduplicate,
        random_source=random_source,
    )


__all__ = ["draw_from_csv", "draw_from_file", "read_csv_file"]
