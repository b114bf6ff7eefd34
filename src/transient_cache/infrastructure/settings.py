"""Environment-driven settings and logging setup."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_MAX_LOCK_DURATION = 100  # seconds
DEFAULT_TTL = 600  # 10 minutes
DEFAULT_STORE_TIMEOUT = 15.0  # seconds

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _positive_int(raw: str | None, default: int) -> int:
    """Parse raw as an int, falling back to default when missing, invalid or <= 0."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def _non_negative_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return max(0, value)


def _positive_float(raw: str | None, default: float) -> float:
    try:
        value = float(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    max_lock_duration: int = DEFAULT_MAX_LOCK_DURATION
    default_ttl: int = DEFAULT_TTL
    store_url: str = ""  # empty selects the in-process MemoryStore
    store_timeout: float = DEFAULT_STORE_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from TRANSIENT_* variables and LOG_LEVEL.

        A TRANSIENT_MAX_LOCK_DURATION that is not a positive integer leaves the
        default of 100 seconds in effect.
        """
        return cls(
            max_lock_duration=_positive_int(
                os.environ.get("TRANSIENT_MAX_LOCK_DURATION"), DEFAULT_MAX_LOCK_DURATION
            ),
            default_ttl=_non_negative_int(os.environ.get("TRANSIENT_DEFAULT_TTL"), DEFAULT_TTL),
            store_url=os.environ.get("TRANSIENT_STORE_URL", "").strip(),
            store_timeout=_positive_float(
                os.environ.get("TRANSIENT_STORE_TIMEOUT"), DEFAULT_STORE_TIMEOUT
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    """Configure root logging at settings.log_level (INFO when the name is unknown)."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
    )
