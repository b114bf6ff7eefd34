from __future__ import annotations

import threading
import time
from typing import Any


class MemoryStore:
    """In-process TTL store implementing the AtomicStore protocol.

    A lock serialises access so that add() is a true create-if-absent within one
    process. Entries are shared only by code holding the same instance.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[Any, float | None]] = {}
        # Value tuple: (data, expires_at_monotonic); None never expires
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return stored value or None if missing or expired."""
        with self._lock:
            return self._live_value(key)

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        """Store value for ttl seconds. A ttl of 0 or less keeps it until deleted."""
        with self._lock:
            self._store[key] = (value, self._expires_at(ttl))

    def add(self, key: str, value: Any, ttl: int = 0) -> bool:
        """Store value only if key holds no live entry. Return True when stored."""
        with self._lock:
            if self._live_value(key) is not None:
                return False
            self._store[key] = (value, self._expires_at(ttl))
            return True

    def delete(self, key: str) -> None:
        """Remove a specific key immediately."""
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._store.clear()

    def evict_expired(self) -> int:
        """Remove all expired entries and return how many were dropped."""
        now = time.monotonic()
        with self._lock:
            expired_keys = [
                k for k, (_, exp) in self._store.items() if exp is not None and now > exp
            ]
            for k in expired_keys:
                del self._store[k]
        return len(expired_keys)

    def __len__(self) -> int:
        """Number of entries held, including expired ones not yet evicted."""
        return len(self._store)

    def _live_value(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at is not None and time.monotonic() > expires_at:
            del self._store[key]
            return None
        return data

    @staticmethod
    def _expires_at(ttl: int) -> float | None:
        if ttl <= 0:
            return None
        return time.monotonic() + ttl
