from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from transient_cache.application.stampede_guard import StampedeGuard
from transient_cache.domain.entities import CacheResult
from transient_cache.domain.exceptions import (
    InvalidKeyError,
    LockHeldError,
    UncallableProducerError,
)
from transient_cache.domain.services import clamp_ttl, derive_cache_key, lock_key_for
from transient_cache.domain.value_objects import Outcome
from transient_cache.infrastructure.settings import Settings
from transient_cache.infrastructure.store import Store

logger = logging.getLogger(__name__)


class Transient:
    """A single cache entry that regenerates itself from a producer on expiry.

    Configuration is a sequential, chainable mutation API:

        weather = (
            Transient("weather:NYC", store)
            .expires_in(600)
            .updates_using(fetch_weather, "NYC")
        )
        result = weather.get()

    get() never blocks on another caller's regeneration and never raises for a
    failing producer; both show up as empty CacheResult outcomes. Errors from the
    store itself do propagate.

    A producer result of None is returned but never stored: stores report a miss
    as None, so such a producer runs again on every get().
    """

    def __init__(
        self,
        seed: str,
        store: Store,
        *,
        guard: StampedeGuard | None = None,
        settings: Settings | None = None,
    ) -> None:
        if not isinstance(seed, str) or not seed:
            raise InvalidKeyError("Transient initialized without a valid key")

        settings = settings or Settings()
        self._key = derive_cache_key(seed)
        self._store = store
        self._guard = guard or StampedeGuard(store, max_lock_duration=settings.max_lock_duration)
        self._producer: Callable[..., Any] | None = None
        self._producer_args: tuple[Any, ...] = ()
        self._ttl = clamp_ttl(settings.default_ttl)
        self._do_cache = self._ttl > 0

    @property
    def key(self) -> str:
        return self._key

    @property
    def lock_key(self) -> str:
        return lock_key_for(self._key)

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def do_cache(self) -> bool:
        return self._do_cache

    @property
    def has_producer(self) -> bool:
        return self._producer is not None

    @property
    def guard(self) -> StampedeGuard:
        return self._guard

    def expires_in(self, seconds: int = 0) -> Transient:
        """Set the cache lifetime in seconds. Negative values clamp to 0.

        A lifetime of 0 turns caching off and deletes any value cached so far.
        """
        self._ttl = clamp_ttl(seconds)
        self._do_cache = self._ttl > 0
        if not self._do_cache:
            self.delete()
        return self

    def updates_using(
        self,
        producer: Callable[..., Any],
        *args: Any,
        args_seq: Sequence[Any] | None = None,
    ) -> Transient:
        """Register the callable that produces the value, and its positional arguments.

        Arguments may be given inline or as a single args_seq sequence, not both.
        Raises UncallableProducerError (leaving the previous producer in place)
        when producer is not callable.
        """
        if not callable(producer):
            raise UncallableProducerError(f"Un-callable producer specified: {producer!r}")
        if args and args_seq is not None:
            raise ValueError("Pass producer arguments inline or as args_seq, not both")

        self._producer = producer
        self._producer_args = tuple(args_seq) if args_seq is not None else args
        return self

    def delete(self) -> Transient:
        """Remove the cached value, if any."""
        self._store.delete(self._key)
        return self

    def get(self) -> CacheResult:
        """Return the cached value, regenerating it when missing."""
        data = self._store.get(self._key)
        if data is not None:
            logger.debug("Cache hit for %s", self._key)
            return CacheResult(Outcome.HIT, data)

        return self._fetch()

    def get_value(self, default: Any = None) -> Any:
        """Return the value from get(), or default when the result is empty."""
        return self.get().value_or(default)

    def _fetch(self) -> CacheResult:
        """Run the producer under the stampede lock and cache what it returns.

        1. No producer: empty result, lock untouched.
        2. Locked and not stale: empty result, no waiting.
        3. Take the lock, call the producer, store the value when caching is on.
        4. Release the lock whatever the producer did.
        """
        if self._producer is None:
            return CacheResult.empty(Outcome.NO_PRODUCER)

        if self._guard.is_locked(self._key) and not self._guard.reclaim_if_stale(self._key):
            logger.info("Regeneration of %s already in progress; skipping", self._key)
            return CacheResult.empty(Outcome.LOCKED)

        try:
            self._guard.acquire(self._key)
        except LockHeldError:
            logger.info("Lost lock race for %s; skipping", self._key)
            return CacheResult.empty(Outcome.LOCKED)

        try:
            try:
                data = self._producer(*self._producer_args)
            except Exception:
                logger.exception("Producer for %s failed", self._key)
                return CacheResult.empty(Outcome.PRODUCER_FAILED)

            # None cannot be told apart from a miss on read, so it is never stored
            if self._do_cache and data is not None:
                self._store.set(self._key, data, self._ttl)
            logger.debug("Regenerated %s (cached=%s)", self._key, self._do_cache)
            return CacheResult(Outcome.REGENERATED, data)
        finally:
            self._guard.release(self._key)
