"""In-memory cache with capacity-bounded LRU eviction and lazy TTL expiry.

Entries live in a dict index and in a doubly linked recency list (head is
most recently used, tail is least recently used), so lookup, insertion and
eviction are all O(1). Expired entries are only reclaimed when a get() hits
them or when capacity pressure pushes them out; there is no background sweep.

Not thread-safe: callers sharing one instance across threads must serialize
access themselves.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from core.entry import CacheEntry
from core.errors import ConfigurationError, ValidationError
from core.events import EvictionCallback, EvictionEvent, EvictionNotifier, EvictReason

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


def _seconds(value: object, error: type) -> float:
    # Finite number of seconds, else `error`
    try:
        seconds = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise error(f"ttl must be a number of seconds, got {value!r}") from e
    if not math.isfinite(seconds):
        raise error(f"ttl must be finite, got {value!r}")
    return seconds


class TTLLRUCache(Generic[K, V]):
    """Key-value cache bounded by entry count and entry lifetime.

    Purpose:
      - get(key, default=None) -> value, or default on a miss (absent or expired)
      - set(key, value, ttl=None) -> None
      - clear() -> None

    Key behavior:
      - capacity is the maximum number of entries (>= 1).
      - ttl is the default lifetime in seconds; 0 means entries never expire.
      - set(..., ttl=None) uses the default, set(..., ttl=0) disables expiry
        for that entry.
      - Removals caused by capacity or expiry are published to subscribers;
        clear() publishes nothing.
    """

    def __init__(
        self,
        *,
        capacity: int = 100,
        ttl: float = 0,
        notifier: Optional[EvictionNotifier] = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ConfigurationError(f"capacity must be a positive integer, got {capacity!r}")
        ttl = _seconds(ttl, ConfigurationError)
        if ttl < 0:
            raise ConfigurationError(f"ttl must be non-negative, got {ttl}")

        self._capacity = capacity
        self._default_ttl = ttl
        self._notifier = notifier or EvictionNotifier()

        self._index: Dict[K, CacheEntry[K, V]] = {}
        self._head: Optional[CacheEntry[K, V]] = None
        self._tail: Optional[CacheEntry[K, V]] = None
        self._size = 0

    # --- public API ---

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    @property
    def notifier(self) -> EvictionNotifier:
        return self._notifier

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        # Peek only: does not refresh recency or check expiry
        return key in self._index

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        entry = self._index.get(key)
        if entry is None:
            return default

        # Lazy expiration
        if self._is_expired(entry):
            self._remove(entry)
            self._publish(entry, "expired")
            return default

        self._move_to_head(entry)
        return entry.value

    def set(self, key: K, value: V, ttl: Optional[float] = None) -> None:
        expires_at = self._resolve_expiry(ttl)

        entry = self._index.get(key)
        if entry is not None:
            # Update in place; never consumes capacity
            entry.value = value
            entry.expires_at = expires_at
            self._move_to_head(entry)
            return

        evicted: Optional[CacheEntry[K, V]] = None
        if self._size >= self._capacity and self._tail is not None:
            # Tail goes out for capacity even if it has also expired
            evicted = self._tail
            self._remove(evicted)

        entry = CacheEntry(key=key, value=value, expires_at=expires_at)
        self._index[key] = entry
        self._add_to_head(entry)

        # Publish only once the structure is consistent again
        if evicted is not None:
            self._publish(evicted, "capacity")

    def clear(self) -> None:
        self._head = None
        self._tail = None
        self._size = 0
        self._index.clear()

    def keys(self) -> List[K]:
        """Keys from most to least recently used (no recency or expiry side effects)."""
        out: List[K] = []
        node = self._head
        while node is not None:
            out.append(node.key)
            node = node.next
        return out

    def subscribe(self, callback: EvictionCallback) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def unsubscribe(self, callback: EvictionCallback) -> bool:
        return self._notifier.unsubscribe(callback)

    # --- O(1) recency-list operations ---

    def _move_to_head(self, entry: CacheEntry[K, V]) -> None:
        if entry is self._head:
            return

        # Detach; entry is not head so entry.prev is set
        if entry.prev is not None:
            entry.prev.next = entry.next
        if entry.next is not None:
            entry.next.prev = entry.prev
        if entry is self._tail:
            self._tail = entry.prev

        entry.prev = None
        entry.next = self._head
        if self._head is not None:
            self._head.prev = entry
        self._head = entry
        if self._tail is None:
            self._tail = entry

    def _add_to_head(self, entry: CacheEntry[K, V]) -> None:
        entry.prev = None
        entry.next = self._head
        if self._head is not None:
            self._head.prev = entry
        self._head = entry
        if self._tail is None:
            self._tail = entry
        self._size += 1

    def _remove(self, entry: CacheEntry[K, V]) -> None:
        del self._index[entry.key]
        self._size -= 1

        if entry.prev is not None:
            entry.prev.next = entry.next
        if entry.next is not None:
            entry.next.prev = entry.prev
        if entry is self._head:
            self._head = entry.next
        if entry is self._tail:
            self._tail = entry.prev

        entry.prev = None
        entry.next = None

    def _is_expired(self, entry: CacheEntry[K, V]) -> bool:
        return entry.expires_at is not None and time.monotonic() >= entry.expires_at

    # --- helpers ---

    def _resolve_expiry(self, ttl: Optional[float]) -> Optional[float]:
        seconds = self._default_ttl if ttl is None else _seconds(ttl, ValidationError)
        if seconds == 0:
            return None
        return time.monotonic() + seconds

    def _publish(self, entry: CacheEntry[K, V], reason: EvictReason) -> None:
        logger.debug("evicted cache key %r (%s)", entry.key, reason)
        self._notifier.publish(EvictionEvent(key=entry.key, value=entry.value, reason=reason))
