"""Utilities for the fair draw subsystem."""

from .draw_id import derive_draw_id
from .engine import FairDrawEngine, durstenfeld_shuffle, replay_shuffle, verify_result
from .random_source import FixedRandomSource, RandomSource, SystemRandomSource
from .statistics import RandomnessSummary, summarize_random_values

__all__ = [
    "FairDrawEngine",
    "FixedRandomSource",
    "RandomSource",
    "RandomnessSummary",
    "SystemRandomSource",
    "derive_draw_id",
    "durstenfeld_shuffle",
    "replay_shuffle",
    "summarize_random_values",
    "verify_result",
]
