from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from transient_cache.domain.value_objects import EMPTY_OUTCOMES, Outcome


@dataclass(frozen=True)
class CacheResult:
    """Result of a cache lookup: a value, or an empty result tagged with its reason."""

    outcome: Outcome
    value: Any = None  # always None for empty outcomes

    @property
    def is_empty(self) -> bool:
        return self.outcome in EMPTY_OUTCOMES

    def value_or(self, default: Any = None) -> Any:
        """Return the value, or default when the result is empty.

        A falsy cached value (0, "", []) is returned as is.
        """
        return default if self.is_empty else self.value

    def __bool__(self) -> bool:
        return not self.is_empty

    @classmethod
    def empty(cls, outcome: Outcome) -> CacheResult:
        if outcome not in EMPTY_OUTCOMES:
            raise ValueError(f"Not an empty outcome: {outcome.value}")
        return cls(outcome=outcome)
