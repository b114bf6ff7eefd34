"""Tests for the in-process MemoryStore."""
from __future__ import annotations

from unittest.mock import patch

from transient_cache.infrastructure.cache import MemoryStore
from transient_cache.infrastructure.store import AtomicStore, Store


def test_satisfies_store_protocols() -> None:
    store = MemoryStore()
    assert isinstance(store, Store)
    assert isinstance(store, AtomicStore)


def test_get_miss_returns_none() -> None:
    assert MemoryStore().get("absent") is None


def test_set_and_get() -> None:
    store = MemoryStore()
    store.set("mykey", {"data": 42}, ttl=60)
    assert store.get("mykey") == {"data": 42}


def test_falsy_values_are_returned() -> None:
    store = MemoryStore()
    store.set("zero", 0)
    store.set("empty", [])
    assert store.get("zero") == 0
    assert store.get("empty") == []


def test_entry_expires_after_ttl() -> None:
    store = MemoryStore()
    base_time = 1000.0
    with patch("transient_cache.infrastructure.cache.time") as mock_time:
        mock_time.monotonic.return_value = base_time
        store.set("k", "v", ttl=90)
        mock_time.monotonic.return_value = base_time + 89.0
        assert store.get("k") == "v"
        mock_time.monotonic.return_value = base_time + 91.0
        assert store.get("k") is None


def test_zero_ttl_never_expires() -> None:
    store = MemoryStore()
    base_time = 1000.0
    with patch("transient_cache.infrastructure.cache.time") as mock_time:
        mock_time.monotonic.return_value = base_time
        store.set("k", "v", ttl=0)
        mock_time.monotonic.return_value = base_time + 10_000_000.0
        assert store.get("k") == "v"


def test_set_overwrites() -> None:
    store = MemoryStore()
    store.set("key", "original")
    store.set("key", "updated")
    assert store.get("key") == "updated"


def test_delete() -> None:
    store = MemoryStore()
    store.set("key", "value")
    store.delete("key")
    assert store.get("key") is None


def test_delete_missing_is_noop() -> None:
    store = MemoryStore()
    store.delete("never-set")
    assert store.get("never-set") is None


def test_add_only_when_absent() -> None:
    store = MemoryStore()
    assert store.add("lock", 1) is True
    assert store.add("lock", 2) is False
    assert store.get("lock") == 1


def test_add_replaces_expired_entry() -> None:
    store = MemoryStore()
    base_time = 1000.0
    with patch("transient_cache.infrastructure.cache.time") as mock_time:
        mock_time.monotonic.return_value = base_time
        store.set("k", "old", ttl=10)
        mock_time.monotonic.return_value = base_time + 11.0
        assert store.add("k", "new") is True
        assert store.get("k") == "new"


def test_clear() -> None:
    store = MemoryStore()
    store.set("k1", "v1")
    store.set("k2", "v2")
    store.clear()
    assert store.get("k1") is None
    assert store.get("k2") is None
    assert len(store) == 0


def test_evict_expired() -> None:
    store = MemoryStore()
    base_time = 1000.0
    with patch("transient_cache.infrastructure.cache.time") as mock_time:
        mock_time.monotonic.return_value = base_time
        store.set("short", "v", ttl=5)
        store.set("long", "v", ttl=500)
        store.set("forever", "v")
        mock_time.monotonic.return_value = base_time + 6.0
        assert store.evict_expired() == 1
    assert len(store) == 2
