"""Shared pytest fixtures for the transient cache test suite."""
from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from transient_cache.application.stampede_guard import StampedeGuard
from transient_cache.infrastructure.cache import MemoryStore
from transient_cache.infrastructure.settings import Settings


@pytest.fixture
def store() -> MemoryStore:
    """A fresh in-process store per test."""
    return MemoryStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(max_lock_duration=100, default_ttl=600)


@pytest.fixture
def guard(store: MemoryStore) -> StampedeGuard:
    return StampedeGuard(store, max_lock_duration=100)


@pytest.fixture
def weather_producer() -> MagicMock:
    """Producer returning a fixed weather reading; call_count tracks regenerations."""
    producer = MagicMock(return_value={"temp": 72})
    return producer


class PlainStore:
    """Store without create-if-absent, for guards that must reject atomic mode."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self.data.get(key)

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


@pytest.fixture
def plain_store() -> PlainStore:
    return PlainStore()
