"""Engine selecting winners with a Durstenfeld shuffle over CSPRNG values."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence, TypeVar

from .draw_id import derive_draw_id
from .random_source import RandomSource, SystemRandomSource
from ..errors import InsufficientParticipantsError, InvalidWinnerCountError
from ..models import (
    DrawResult,
    Participant,
    ProcessingDetails,
    RANDOM_VALUE_RANGE,
    RandomizationDetails,
    ShuffleStep,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def durstenfeld_shuffle(
    items: Sequence[T],
    random_values: Sequence[int],
) -> tuple[list[T], list[tuple[int, T, int, int]]]:
    """Shuffle a copy of ``items`` using pre-drawn random values.

    For every index ``i`` from ``len(items) - 1`` down to ``1`` the element at
    ``i`` is swapped with the one at ``j = random_values[i] % (i + 1)``, so
    ``j`` is uniform over ``[0, i]``. ``random_values[0]`` is drawn but never
    used.

    Parameters
    ----------
    items : Sequence[T]
        Elements to shuffle. The sequence itself is left untouched.
    random_values : Sequence[int]
        One unsigned 32-bit value per element.

    Returns
    -------
    tuple[list[T], list[tuple[int, T, int, int]]]
        The shuffled copy and, in loop order, one ``(i, item_at_i, j, raw)``
        tuple per swap, where ``item_at_i`` is the element at ``i`` before the
        swap.
    """
    if len(random_values) != len(items):
        raise ValueError(
            f"expected {len(items)} random values, got {len(random_values)}"
        )
    shuffled = list(items)
    swaps: list[tuple[int, T, int, int]] = []
    for i in range(len(shuffled) - 1, 0, -1):
        raw = random_values[i]
        j = raw % (i + 1)
        swaps.append((i, shuffled[i], j, raw))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled, swaps


def replay_shuffle(
    pre_shuffle_order: Sequence[T],
    random_values: Sequence[int],
) -> list[T]:
    """Re-run the shuffle recorded in an audit trail and return the result."""
    shuffled, _ = durstenfeld_shuffle(pre_shuffle_order, random_values)
    return shuffled


def verify_result(result: DrawResult) -> bool:
    """Check that ``result`` is reproducible from its own recorded values.

    The pre-shuffle order is replayed with the raw random values; the replay
    must equal the recorded post-shuffle order and the winners must be its
    leading elements.
    """
    details = result.randomization
    if len(details.random_values) != len(details.pre_shuffle_order):
        return False
    replayed = replay_shuffle(details.pre_shuffle_order, details.random_values)
    if tuple(replayed) != details.post_shuffle_order:
        return False
    return tuple(replayed[: len(result.winners)]) == result.winners


class FairDrawEngine:
    """Engine that draws winners uniformly at random and records the process."""

    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        """Create a draw engine.

        Parameters
        ----------
        random_source : Optional[RandomSource], default: None
            Source of random values and identifiers. Typically omitted, in
            which case the operating system CSPRNG is used.
        """

        self._random_source = random_source or SystemRandomSource()

    @property
    def random_source(self) -> RandomSource:
        return self._random_source

    def draw(
        self,
        participants: Sequence[Participant],
        winner_count: int,
        *,
        processing: Optional[ProcessingDetails] = None,
    ) -> DrawResult:
        """Select ``winner_count`` distinct participants.

        Parameters
        ----------
        participants : Sequence[Participant]
            Candidates in upload order. Two entries with the same name and
            email are still distinct outcomes.
        winner_count : int
            Number of winners to select.
        processing : Optional[ProcessingDetails], default: None
            Ingestion details copied into the result for the audit report.

        Returns
        -------
        DrawResult
            Winners, identifiers and the full randomization trail.

        Notes
        -----
        The draw performs the following steps:

        1. Validate the winner count against the participant list.
        2. Fetch one 32-bit random value per participant in a single batch.
        3. Shuffle the whole list (Durstenfeld) and record every swap.
        4. Take the first ``winner_count`` elements as winners.
        5. Stamp the result with a short draw id and the UTC completion time.

        Raises
        ------
        InvalidWinnerCountError
            If ``winner_count`` is not a positive integer.
        InsufficientParticipantsError
            If fewer participants than ``winner_count`` are supplied.
        RandomSourceUnavailableError
            If the random source cannot provide values.
        """
        if isinstance(winner_count, bool) or not isinstance(winner_count, int):
            raise InvalidWinnerCountError(winner_count)
        if winner_count <= 0:
            raise InvalidWinnerCountError(winner_count)

        pre_shuffle_order = tuple(participants)
        total = len(pre_shuffle_order)
        if total < winner_count:
            raise InsufficientParticipantsError(available=total, requested=winner_count)

        # All values are fetched before shuffling so the trace order does not
        # depend on the source.
        random_values = self._random_source.random_uint32(total)
        shuffled, swaps = durstenfeld_shuffle(pre_shuffle_order, random_values)
        timestamp = datetime.now(timezone.utc)
        draw_id = derive_draw_id(self._random_source.unique_id())

        steps = tuple(
            ShuffleStep(
                step=counter,
                position=i,
                description=f"swapping position {i} with position {j}",
                participant=participant,
                random_value=raw / RANDOM_VALUE_RANGE,
                new_position=j,
            )
            for counter, (i, participant, j, raw) in enumerate(swaps, start=1)
        )

        logger.info(
            "Draw %s selected %d of %d participant(s)", draw_id, winner_count, total
        )
        return DrawResult(
            winners=tuple(shuffled[:winner_count]),
            total_participants=total,
            draw_id=draw_id,
            timestamp=timestamp,
            randomization=RandomizationDetails(
                random_values=tuple(random_values),
                pre_shuffle_order=pre_shuffle_order,
                post_shuffle_order=tuple(shuffled),
                shuffle_steps=steps,
            ),
            processing=processing,
            random_source=self._random_source.description,
        )


__all__ = [
    "FairDrawEngine",
    "durstenfeld_shuffle",
    "replay_shuffle",
    "verify_result",
]
