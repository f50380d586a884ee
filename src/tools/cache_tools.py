"""MCP tools exposing a shared in-process key-value cache.

Registers 'cache_get', 'cache_set', 'cache_clear' and 'cache_stats' on top
of one TTLLRUCache instance injected by the server.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from core.cache import TTLLRUCache
from core.errors import ValidationError
from core.events import EvictionStats


def _require_key(key: str) -> str:
    key_clean = (key or "").strip()
    if not key_clean:
        raise ValidationError("Missing cache key")
    return key_clean


def register(
    mcp: FastMCP,
    *,
    cache: TTLLRUCache[str, str],
    stats: Optional[EvictionStats] = None,
) -> None:
    @mcp.tool(name="cache_get")
    async def cache_get(key: str) -> Dict[str, Any]:
        """Look up a key in the shared cache.

        Returns:
          {"key", "hit", "value"}; value is null on a miss (absent or expired).
        """
        key_clean = _require_key(key)
        value = cache.get(key_clean)
        return {"key": key_clean, "hit": value is not None, "value": value}

    @mcp.tool(name="cache_set")
    async def cache_set(key: str, value: str, ttl_seconds: Optional[float] = None) -> Dict[str, Any]:
        """Store a value in the shared cache.

        Params:
          - key: non-empty cache key.
          - value: text to store.
          - ttl_seconds: lifetime override; omit for the server default,
            0 for no expiry.
        """
        key_clean = _require_key(key)
        if ttl_seconds is not None and (not math.isfinite(ttl_seconds) or ttl_seconds < 0):
            raise ValidationError("ttl_seconds must be a finite, non-negative number")

        cache.set(key_clean, value, ttl=ttl_seconds)
        return {"key": key_clean, "stored": True, "size": cache.size}

    @mcp.tool(name="cache_clear")
    async def cache_clear() -> Dict[str, int]:
        """Drop every entry from the shared cache (no eviction events)."""
        cleared = cache.size
        cache.clear()
        return {"cleared": cleared, "size": cache.size}

    @mcp.tool(name="cache_stats")
    async def cache_stats() -> Dict[str, Any]:
        """Report size, configuration, recency order and eviction counts."""
        return {
            "size": cache.size,
            "capacity": cache.capacity,
            "default_ttl": cache.default_ttl,
            "keys": cache.keys(),
            "evictions": stats.as_dict() if stats is not None else None,
        }
