"""Recency-list node used by the cache engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass(slots=True, eq=False)
class CacheEntry(Generic[K, V]):
    # Stores key/value + optional monotonic expiration time
    key: K
    value: V
    expires_at: Optional[float] = None  # time.monotonic(); None = never expires
    prev: Optional["CacheEntry[K, V]"] = None
    next: Optional["CacheEntry[K, V]"] = None
