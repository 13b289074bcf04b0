"""Draw session owning the participant list and the single draw result."""

from __future__ import annotations

import enum
import logging
import threading
from typing import Iterable, Optional

from .config import get_settings
from .draw.engine import FairDrawEngine
from .draw.random_source import RandomSource
from .errors import DrawAlreadyCompletedError, DrawInProgressError
from .ingestion.parser import IngestionReport, parse_with_report
from .models import DrawResult, Participant

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    COMPLETED = "completed"


class DrawSession:
    """Single draw session: ``IDLE -> DRAWING -> COMPLETED``.

    A session holds at most one :class:`~fairdraw.models.DrawResult`. Once a
    draw has completed, further draws are refused until :meth:`reset` is
    called or a new participant list is loaded. A failed draw returns the
    session to ``IDLE`` with its participants untouched.

    Parameters
    ----------
    random_source : Optional[RandomSource], default: None
        Source handed to the :class:`FairDrawEngine`; the system CSPRNG when
        omitted.
    deduplicate : Optional[bool], default: None
        Drop rows repeating an earlier email when loading CSV text. Defaults
        to the ``FAIRDRAW_DEDUPLICATE`` setting.
    default_winner_count : Optional[int], default: None
        Winner count used by :meth:`draw` when none is given. Defaults to the
        ``FAIRDRAW_WINNER_COUNT`` setting.
    """

    def __init__(
        self,
        *,
        random_source: Optional[RandomSource] = None,
        deduplicate: Optional[bool] = None,
        default_winner_count: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self._engine = FairDrawEngine(random_source)
        self.deduplicate = settings.deduplicate if deduplicate is None else deduplicate
        self.default_winner_count = (
            settings.winner_count if default_winner_count is None else default_winner_count
        )
        self._lock = threading.Lock()
        self._state = SessionState.IDLE
        self._participants: tuple[Participant, ...] = ()
        self._ingestion: Optional[IngestionReport] = None
        self._result: Optional[DrawResult] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def participants(self) -> tuple[Participant, ...]:
        return self._participants

    @property
    def ingestion(self) -> Optional[IngestionReport]:
        return self._ingestion

    @property
    def result(self) -> Optional[DrawResult]:
        return self._result

    def load_csv(self, raw_text: str) -> IngestionReport:
        """Parse ``raw_text`` and replace the participant list with its rows.

        Any previous result is discarded, as with :meth:`reset`.
        """
        report = parse_with_report(raw_text, deduplicate=self.deduplicate)
        self._replace(report.participants, report)
        logger.info(
            "Loaded %d participant(s) (%s format)",
            len(report.participants),
            report.dialect.value,
        )
        return report

    def load_participants(self, participants: Iterable[Participant]) -> None:
        """Replace the participant list with ``participants``."""
        self._replace(tuple(participants), None)

    def draw(self, winner_count: Optional[int] = None) -> DrawResult:
        """Run the session's draw.

        Raises
        ------
        DrawInProgressError
            If another draw is running on this session.
        DrawAlreadyCompletedError
            If the session already holds a result.
        InvalidWinnerCountError, InsufficientParticipantsError
            Propagated from the engine; the session stays ``IDLE``.
        """
        if not self._lock.acquire(blocking=False):
            raise DrawInProgressError("a draw is already in progress for this session")
        try:
            if self._result is not None:
                raise DrawAlreadyCompletedError(
                    f"draw {self._result.draw_id} already completed; reset the session first"
                )
            count = self.default_winner_count if winner_count is None else winner_count
            self._state = SessionState.DRAWING
            try:
                result = self._engine.draw(
                    self._participants,
                    count,
                    processing=(
                        self._ingestion.to_processing_details()
                        if self._ingestion is not None
                        else None
                    ),
                )
            except Exception:
                self._state = SessionState.IDLE
                raise
            self._result = result
            self._state = SessionState.COMPLETED
            return result
        finally:
            self._lock.release()

    def reset(self) -> None:
        """Return to ``IDLE`` with no participants and no result."""
        self._replace((), None)
        logger.info("Session reset")

    def _replace(
        self,
        participants: tuple[Participant, ...],
        ingestion: Optional[IngestionReport],
    ) -> None:
        if not self._lock.acquire(blocking=False):
            raise DrawInProgressError("cannot modify the session while a draw is running")
        try:
            self._participants = participants
            self._ingestion = ingestion
            self._result = None
            self._state = SessionState.IDLE
        finally:
            self._lock.release()


__all__ = ["DrawSession", "SessionState"]
