"""Logging setup for command line use."""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> int:
    """Configure the root logger and return the numeric level applied.

    ``level`` falls back to the ``LOG_LEVEL`` setting; unknown names fall back
    to ``INFO``. Output goes to stderr so reports printed on stdout stay clean.
    """
    if level is None:
        from .config import get_settings

        level = get_settings().log_level
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger(__name__).debug("Logging initialised at %s", logging.getLevelName(numeric))
    return numeric


__all__ = ["setup_logging"]
