"""Fair, auditable winner draws from CSV participant lists."""

from .draw import FairDrawEngine, FixedRandomSource, RandomSource, SystemRandomSource
from .errors import (
    DrawAlreadyCompletedError,
    DrawInProgressError,
    FairDrawError,
    InsufficientParticipantsError,
    InvalidWinnerCountError,
    RandomSourceUnavailableError,
)
from .ingestion import CsvDialect, parse, parse_with_report
from .models import DrawResult, Participant
from .session import DrawSession, SessionState
from .workflows import draw_from_csv, draw_from_file


def draw(participants, winner_count, *, random_source=None):
    """Draw ``winner_count`` winners from ``participants``.

    Shortcut for ``FairDrawEngine(random_source).draw(participants, winner_count)``.
    """
    return FairDrawEngine(random_source).draw(participants, winner_count)


__all__ = [
    "CsvDialect",
    "DrawAlreadyCompletedError",
    "DrawInProgressError",
    "DrawResult",
    "DrawSession",
    "FairDrawEngine",
    "FairDrawError",
    "FixedRandomSource",
    "InsufficientParticipantsError",
    "InvalidWinnerCountError",
    "Participant",
    "RandomSource",
    "RandomSourceUnavailableError",
    "SessionState",
    "SystemRandomSource",
    "draw",
    "draw_from_csv",
    "draw_from_file",
    "parse",
    "parse_with_report",
]
