from __future__ import annotations

import time
from datetime import datetime, timezone


def now_epoch() -> int:
    """Return the current wall-clock time as whole seconds since the epoch."""
    return int(time.time())


def from_epoch(seconds: int) -> datetime:
    """Convert epoch seconds to a timezone-aware UTC datetime (for log output)."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
