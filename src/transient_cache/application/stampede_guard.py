from __future__ import annotations

import logging

from transient_cache.domain.exceptions import LockHeldError
from transient_cache.domain.services import is_stale, lock_age, lock_key_for, parse_lock_timestamp
from transient_cache.infrastructure.settings import DEFAULT_MAX_LOCK_DURATION
from transient_cache.infrastructure.store import AtomicStore, Store
from transient_cache.infrastructure.time_utils import from_epoch, now_epoch

logger = logging.getLogger(__name__)


class StampedeGuard:
    """Advisory per-key regeneration lock kept in the shared store.

    The lock entry lives at "lock_" + cache key and holds the epoch second it was
    taken. It has no TTL of its own; a lock older than max_lock_duration is
    presumed abandoned and may be reclaimed by the next caller.

    With atomic=False the lock is a plain overwrite, so two callers that both
    see the key unlocked will both regenerate. With atomic=True the store's
    create-if-absent add() is used and acquire() raises LockHeldError instead.
    """

    def __init__(
        self,
        store: Store,
        *,
        max_lock_duration: int = DEFAULT_MAX_LOCK_DURATION,
        atomic: bool = False,
    ) -> None:
        if atomic and not isinstance(store, AtomicStore):
            raise TypeError(f"{type(store).__name__} does not support create-if-absent")
        self._store = store
        self._atomic = atomic
        # Must exceed the slowest producer, or live regenerations get duplicated
        self._max_lock_duration = (
            max_lock_duration if max_lock_duration > 0 else DEFAULT_MAX_LOCK_DURATION
        )

    @property
    def max_lock_duration(self) -> int:
        return self._max_lock_duration

    @property
    def atomic(self) -> bool:
        return self._atomic

    def is_locked(self, key: str) -> bool:
        """Return True when a lock entry exists for cache key."""
        return self._store.get(lock_key_for(key)) is not None

    def lock_timestamp(self, key: str) -> int | None:
        """Return when the lock on key was taken (epoch seconds), or None."""
        return parse_lock_timestamp(self._store.get(lock_key_for(key)))

    def acquire(self, key: str) -> None:
        """Take the lock on key, stamped with the current time."""
        lock_key = lock_key_for(key)
        now = now_epoch()
        if self._atomic:
            if not self._store.add(lock_key, now, 0):  # type: ignore[attr-defined]
                raise LockHeldError(lock_key)
        else:
            self._store.set(lock_key, now, 0)
        logger.debug("Acquired lock %s at %d", lock_key, now)

    def release(self, key: str) -> None:
        """Drop the lock on key. Safe to call when it is not held."""
        self._store.delete(lock_key_for(key))
        logger.debug("Released lock %s", lock_key_for(key))

    def reclaim_if_stale(self, key: str) -> bool:
        """Return True when it is safe to regenerate key.

        - not locked: True
        - locked for max_lock_duration seconds or more: release it, True
        - otherwise: False
        """
        raw = self._store.get(lock_key_for(key))
        if raw is None:
            return True

        locked_at = parse_lock_timestamp(raw)
        now = now_epoch()
        if not is_stale(locked_at, now, self._max_lock_duration):
            return False

        if locked_at is None:
            logger.warning("Reclaiming lock on %s with unreadable timestamp %r", key, raw)
        else:
            logger.warning(
                "Reclaiming stale lock on %s taken at %s, held for %ds (max %ds)",
                key,
                from_epoch(locked_at).isoformat(),
                lock_age(locked_at, now),
                self._max_lock_duration,
            )
        self.release(key)
        return True
