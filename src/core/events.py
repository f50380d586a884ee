"""Eviction notifications for the cache engine.

Subscribers are plain callables receiving an EvictionEvent. They are called
synchronously, in registration order, at the moment an entry is removed by
capacity pressure or lazy expiration (never by clear()).

The engine is not reentrancy-safe: a handler that mutates the same cache
instance runs as an ordinary nested operation while the outer one is still
in progress.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Literal, TypeVar

K = TypeVar("K")
V = TypeVar("V")

EvictReason = Literal["capacity", "expired"]


@dataclass(frozen=True, slots=True)
class EvictionEvent(Generic[K, V]):
    key: K
    value: V
    reason: EvictReason


EvictionCallback = Callable[[EvictionEvent], None]


class EvictionNotifier:
    def __init__(self) -> None:
        self._subscribers: List[EvictionCallback] = []

    def subscribe(self, callback: EvictionCallback) -> Callable[[], None]:
        """Register a callback and return a function that removes it again."""
        if not callable(callback):
            raise TypeError("eviction callback must be callable")
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: EvictionCallback) -> bool:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return False
        return True

    def publish(self, event: EvictionEvent) -> None:
        # Snapshot so handlers may (un)subscribe during delivery
        for callback in list(self._subscribers):
            callback(event)

    def __len__(self) -> int:
        return len(self._subscribers)


class EvictionStats:
    """Subscriber that tallies evictions per reason."""

    def __init__(self) -> None:
        self.capacity = 0
        self.expired = 0

    def __call__(self, event: EvictionEvent) -> None:
        if event.reason == "capacity":
            self.capacity += 1
        else:
            self.expired += 1

    @property
    def total(self) -> int:
        return self.capacity + self.expired

    def as_dict(self) -> Dict[str, int]:
        return {"capacity": self.capacity, "expired": self.expired, "total": self.total}
