from __future__ import annotations

import httpx

from transient_cache.application.stampede_guard import StampedeGuard
from transient_cache.application.transient import Transient
from transient_cache.domain.entities import CacheResult
from transient_cache.domain.exceptions import (
    InvalidKeyError,
    LockHeldError,
    StoreError,
    TransientCacheError,
    UncallableProducerError,
)
from transient_cache.domain.value_objects import Outcome
from transient_cache.infrastructure.cache import MemoryStore
from transient_cache.infrastructure.http_store import HttpStore
from transient_cache.infrastructure.settings import Settings, configure_logging
from transient_cache.infrastructure.store import AtomicStore, Store

__all__ = [
    "AtomicStore",
    "CacheResult",
    "HttpStore",
    "InvalidKeyError",
    "LockHeldError",
    "MemoryStore",
    "Outcome",
    "Settings",
    "StampedeGuard",
    "Store",
    "StoreError",
    "Transient",
    "TransientCacheError",
    "UncallableProducerError",
    "close_stores",
    "configure_logging",
    "create_store",
    "create_transient",
]

# Process-wide store used when no store URL is configured
_default_store = MemoryStore()

# One HttpStore (and one httpx.Client) per (url, timeout)
_http_stores: dict[tuple[str, float], HttpStore] = {}


def create_store(settings: Settings) -> Store:
    """Return the shared HttpStore for settings.store_url, else the shared MemoryStore."""
    if settings.store_url:
        store_id = (settings.store_url, settings.store_timeout)
        store = _http_stores.get(store_id)
        if store is None:
            http_client = httpx.Client(timeout=settings.store_timeout, follow_redirects=True)
            store = HttpStore(settings.store_url, http_client=http_client)
            _http_stores[store_id] = store
        return store
    return _default_store


def close_stores() -> None:
    """Close every shared HttpStore; later create_store calls open fresh ones."""
    while _http_stores:
        _, store = _http_stores.popitem()
        store.close()


def create_transient(
    seed: str,
    settings: Settings | None = None,
    store: Store | None = None,
    *,
    atomic: bool = False,
) -> Transient:
    """Create a Transient with store and stampede guard wired from settings.

    settings defaults to Settings.from_env(). Raises InvalidKeyError for an empty seed.
    """
    settings = settings or Settings.from_env()
    store = store if store is not None else create_store(settings)
    guard = StampedeGuard(store, max_lock_duration=settings.max_lock_duration, atomic=atomic)
    return Transient(seed, store, guard=guard, settings=settings)
