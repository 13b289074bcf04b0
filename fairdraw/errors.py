"""Exceptions raised by the fair draw package."""

from __future__ import annotations


class FairDrawError(Exception):
    """Base class for every error raised by :mod:`fairdraw`."""


class InvalidWinnerCountError(FairDrawError, ValueError):
    """Raised when the requested number of winners is not a positive integer."""

    def __init__(self, winner_count: object) -> None:
        super().__init__(f"winner count must be positive (got {winner_count!r})")
        self.winner_count = winner_count


class InsufficientParticipantsError(FairDrawError, ValueError):
    """Raised when fewer participants are available than winners requested.

    Attributes
    ----------
    available : int
        Number of participants supplied to the draw.
    requested : int
        Number of winners that was asked for.
    """

    def __init__(self, available: int, requested: int) -> None:
        super().__init__(
            f"Need at least {requested} participants to draw {requested} winners "
            f"(only {available} available)"
        )
        self.available = available
        self.requested = requested


class RandomSourceUnavailableError(FairDrawError, RuntimeError):
    """Raised when no cryptographically secure random source can be used."""


class DrawSessionError(FairDrawError, RuntimeError):
    """Raised when a session operation is not allowed in its current state."""


class DrawInProgressError(DrawSessionError):
    """Raised when a draw is started while another one is still running."""


class DrawAlreadyCompletedError(DrawSessionError):
    """Raised when a draw is started on a session that already has a result."""


__all__ = [
    "DrawAlreadyCompletedError",
    "DrawInProgressError",
    "DrawSessionError",
    "FairDrawError",
    "InsufficientParticipantsError",
    "InvalidWinnerCountError",
    "RandomSourceUnavailableError",
]
