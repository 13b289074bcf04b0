"""Participant value object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Participant:
    """A single entrant of a draw.

    Attributes
    ----------
    name : str
        Display name, either read from the file or synthesised from the email.
    email : str
        Email address as parsed (trimmed, not case-folded). Used as the
        identity when de-duplicating.
    """

    name: str
    email: str

    def to_json(self) -> dict:
        return {"name": self.name, "email": self.email}

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


__all__ = ["Participant"]
