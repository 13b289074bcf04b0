"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer") from exc


@dataclass
class Settings:
    """Runtime configuration read from the environment (and ``.env``)."""

    winner_count: int = field(default_factory=lambda: _env_int("FAIRDRAW_WINNER_COUNT", 7))
    deduplicate: bool = field(
        default_factory=lambda: _env_bool("FAIRDRAW_DEDUPLICATE", False)
    )
    csv_encoding: str = field(
        default_factory=lambda: os.getenv("FAIRDRAW_CSV_ENCODING", "utf-8")
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper()
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


__all__ = ["Settings", "get_settings"]
