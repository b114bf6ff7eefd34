from __future__ import annotations

from enum import Enum


class Outcome(str, Enum):
    """How a Transient.get() call was resolved.

    HIT and REGENERATED carry a value; the rest are empty results.
    """

    HIT = "hit"
    REGENERATED = "regenerated"
    NO_PRODUCER = "no_producer"
    LOCKED = "locked"  # another caller is regenerating
    PRODUCER_FAILED = "producer_failed"


EMPTY_OUTCOMES = frozenset({Outcome.NO_PRODUCER, Outcome.LOCKED, Outcome.PRODUCER_FAILED})
