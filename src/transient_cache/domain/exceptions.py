from __future__ import annotations


class TransientCacheError(Exception):
    """Base exception for all transient cache errors."""


class InvalidKeyError(TransientCacheError, ValueError):
    """Raised when a transient is constructed without a usable key seed."""


class UncallableProducerError(TransientCacheError, TypeError):
    """Raised when a producer that cannot be called is registered."""


class LockHeldError(TransientCacheError):
    """Raised by an atomic guard when another caller already holds the lock."""

    def __init__(self, lock_key: str) -> None:
        self.lock_key = lock_key
        super().__init__(f"Lock already held: {lock_key}")


class StoreError(TransientCacheError):
    """Raised when the backing key-value service returns an unexpected HTTP error status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"Store error ({status_code})")
