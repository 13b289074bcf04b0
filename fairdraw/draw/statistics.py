"""Descriptive statistics over the random values consumed by a draw.

These figures are commentary for the audit report; they do not take part in
selecting winners and are not a test of randomness quality.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

ENTROPY_FLOOR = 0.000001
"""Substitute for a zero value so ``log2`` stays defined."""


@dataclass(frozen=True)
class RandomnessSummary:
    """Summary statistics of normalised random values.

    Attributes
    ----------
    count : int
        Number of values summarised.
    entropy : float
        ``-sum(v * log2(v))`` over the values, in bits.
    mean : float
        Arithmetic mean, ``0.5`` is expected for uniform values.
    variance : float
        Population variance, ``1/12`` is expected for uniform values.
    """

    count: int
    entropy: float
    mean: float
    variance: float

    def to_json(self) -> dict:
        return {
            "count": self.count,
            "entropy": self.entropy,
            "mean": self.mean,
            "variance": self.variance,
        }


def _entropy(values: Sequence[float]) -> float:
    total = 0.0
    for value in values:
        total -= value * math.log2(value or ENTROPY_FLOOR)
    return total


def summarize_random_values(values: Sequence[float]) -> RandomnessSummary:
    """Compute entropy, mean and variance of ``values``.

    Parameters
    ----------
    values : Sequence[float]
        Normalised random values in ``[0, 1)``.

    Returns
    -------
    RandomnessSummary
        All figures are ``0.0`` for an empty sequence.
    """
    count = len(values)
    if count == 0:
        return RandomnessSummary(count=0, entropy=0.0, mean=0.0, variance=0.0)
    mean = math.fsum(values) / count
    variance = math.fsum((value - mean) ** 2 for value in values) / count
    return RandomnessSummary(
        count=count,
        entropy=_entropy(values),
        mean=mean,
        variance=variance,
    )


__all__ = ["ENTROPY_FLOOR", "RandomnessSummary", "summarize_random_values"]
