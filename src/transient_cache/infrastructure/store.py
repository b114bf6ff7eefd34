from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Store(Protocol):
    """Key-value store with per-entry TTL, supplied by the host application.

    Implementations must provide atomic single-key reads, writes and deletes.
    A ttl of 0 means "keep indefinitely" (or the host's default lifetime).
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        """Store value under key, overwriting any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        ...


@runtime_checkable
class AtomicStore(Store, Protocol):
    """Store that can also create a key only if it is absent."""

    def add(self, key: str, value: Any, ttl: int = 0) -> bool:
        """Store value only when key is absent. Return False if it already exists."""
        ...
