from .participant import Participant  # noqa: F401
from .draw_result import (  # noqa: F401
    DrawResult,
    ProcessingDetails,
    RANDOM_VALUE_RANGE,
    RandomizationDetails,
    ShuffleStep,
    ValidationResults,
)

__all__ = [
    "DrawResult",
    "Participant",
    "ProcessingDetails",
    "RANDOM_VALUE_RANGE",
    "RandomizationDetails",
    "ShuffleStep",
    "ValidationResults",
]
