from __future__ import annotations

import hashlib
from typing import Any

KEY_PREFIX = "transient_"
LOCK_PREFIX = "lock_"


def derive_cache_key(seed: str) -> str:
    """Return the namespaced cache key for a seed string.

    The key is KEY_PREFIX followed by the hex md5 digest of the UTF-8 encoded seed,
    so it has a fixed length whatever the seed.
    """
    digest = hashlib.md5(seed.encode("utf-8")).hexdigest()
    return KEY_PREFIX + digest


def lock_key_for(cache_key: str) -> str:
    """Return the key of the lock entry guarding cache_key."""
    return LOCK_PREFIX + cache_key


def clamp_ttl(seconds: Any) -> int:
    """Coerce seconds to an int TTL, clamping negatives to 0.

    Raises ValueError/TypeError when seconds cannot be converted to int.
    """
    ttl = int(seconds)
    return max(0, ttl)


def parse_lock_timestamp(raw: Any) -> int | None:
    """Return a lock entry value as epoch seconds, or None when it is not a valid timestamp."""
    if isinstance(raw, bool):
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


def lock_age(locked_at: int, now: int) -> int:
    """Return how many whole seconds a lock taken at locked_at has been held."""
    return int(now - locked_at)


def is_stale(locked_at: int | None, now: int, max_duration: int) -> bool:
    """Return True when a lock is old enough to be reclaimed.

    A lock whose timestamp could not be read (None) is always stale.
    """
    if locked_at is None:
        return True
    return lock_age(locked_at, now) >= max_duration
