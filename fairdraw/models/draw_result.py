"""Immutable records describing a completed draw."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from .participant import Participant
from .utils import dt_iso

if TYPE_CHECKING:
    from ..ingestion.dialect import CsvDialect

RANDOM_VALUE_RANGE = 2**32
"""Number of distinct values a 32-bit unsigned random word can take."""


@dataclass(frozen=True)
class ShuffleStep:
    """One swap performed by the shuffle.

    Attributes
    ----------
    step : int
        Sequential counter starting at 1.
    position : int
        Outer loop index ``i`` the swap was performed at.
    description : str
        Human-readable summary, ``"swapping position i with position j"``.
    participant : Participant
        Participant that occupied ``position`` before the swap.
    random_value : float
        Normalised random value (raw value divided by 2**32) in ``[0, 1)``.
    new_position : int
        Index ``j`` the participant was moved to.
    """

    step: int
    position: int
    description: str
    participant: Participant
    random_value: float
    new_position: int

    def to_json(self) -> dict:
        return {
            "step": self.step,
            "position": self.position,
            "description": self.description,
            "participant": self.participant.to_json(),
            "randomValue": self.random_value,
            "newPosition": self.new_position,
        }


@dataclass(frozen=True)
class RandomizationDetails:
    """Everything needed to replay a shuffle.

    ``random_values`` holds the raw 32-bit words exactly as they were consumed,
    one per input position, so a replay is bit-for-bit exact.
    """

    random_values: tuple[int, ...]
    pre_shuffle_order: tuple[Participant, ...]
    post_shuffle_order: tuple[Participant, ...]
    shuffle_steps: tuple[ShuffleStep, ...]

    @property
    def normalized_values(self) -> tuple[float, ...]:
        """Random values scaled into ``[0, 1)``."""
        return tuple(value / RANDOM_VALUE_RANGE for value in self.random_values)

    def to_json(self) -> dict:
        return {
            "rawRandomValues": list(self.random_values),
            "randomValues": list(self.normalized_values),
            "preShuffleOrder": [p.to_json() for p in self.pre_shuffle_order],
            "postShuffleOrder": [p.to_json() for p in self.post_shuffle_order],
            "shuffleSteps": [s.to_json() for s in self.shuffle_steps],
        }


@dataclass(frozen=True)
class ValidationResults:
    """Row counts gathered while ingesting a CSV file."""

    total_entries: int = 0
    valid_entries: int = 0
    invalid_entries: int = 0
    duplicates_found: int = 0
    duplicates_removed: int = 0

    def to_json(self) -> dict:
        return {
            "totalEntries": self.total_entries,
            "validEntries": self.valid_entries,
            "invalidEntries": self.invalid_entries,
            "duplicatesFound": self.duplicates_found,
            "duplicatesRemoved": self.duplicates_removed,
        }


@dataclass(frozen=True)
class ProcessingDetails:
    """How the participant list of a draw was obtained from its source file."""

    dialect: "CsvDialect"
    source_info: str
    parsing_notes: tuple[str, ...] = ()
    validation: ValidationResults = field(default_factory=ValidationResults)

    def to_json(self) -> dict:
        return {
            "csvFormat": self.dialect.value,
            "csvSourceInfo": self.source_info,
            "parsingNotes": list(self.parsing_notes),
            "validationResults": self.validation.to_json(),
        }


@dataclass(frozen=True)
class DrawResult:
    """Outcome of a single draw. Created once and never mutated.

    Attributes
    ----------
    winners : tuple[Participant, ...]
        Selected participants in the order they landed in the shuffled list.
    total_participants : int
        Size of the participant list at draw time.
    draw_id : str
        Short opaque identifier of the draw. Uniqueness is best-effort.
    timestamp : datetime
        UTC instant at which the shuffle completed.
    randomization : RandomizationDetails
        Raw random values, orderings and swap trace.
    processing : Optional[ProcessingDetails]
        Ingestion details when the participants came from a CSV upload.
    random_source : Optional[str]
        Description of the random source the values were taken from.
    """

    winners: tuple[Participant, ...]
    total_participants: int
    draw_id: str
    timestamp: datetime
    randomization: RandomizationDetails
    processing: Optional[ProcessingDetails] = None
    random_source: Optional[str] = None

    @property
    def all_participants(self) -> tuple[Participant, ...]:
        return self.randomization.pre_shuffle_order

    def ranked_winners(self) -> list[tuple[int, Participant]]:
        """Return ``(rank, participant)`` pairs with 1-based ranks."""
        return list(enumerate(self.winners, start=1))

    def to_json(self) -> dict:
        """Return the structured export of this result.

        Keys use the camelCase names of the exchange format consumed by
        report tooling (``drawId``, ``totalParticipants`` ...).
        """
        return {
            "drawId": self.draw_id,
            "timestamp": dt_iso(self.timestamp),
            "totalParticipants": self.total_participants,
            "winnerCount": len(self.winners),
            "winners": [
                {"rank": rank, **winner.to_json()}
                for rank, winner in self.ranked_winners()
            ],
            "randomizationDetails": self.randomization.to_json(),
            "randomSource": self.random_source,
            "processingDetails": (
                self.processing.to_json() if self.processing is not None else None
            ),
        }


__all__ = [
    "DrawResult",
    "ProcessingDetails",
    "RANDOM_VALUE_RANGE",
    "RandomizationDetails",
    "ShuffleStep",
    "ValidationResults",
]
