"""HTTP fetch client whose successful responses are memoized in a TTL/LRU cache.

GET requests go through httpx; the response text is cached per normalized
URL via `core.cacheable`, so repeated fetches within the TTL never touch the
network. Failures are raised as ExternalServiceError and never cached.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

import httpx

from core.cache import TTLLRUCache
from core.cacheable import cacheable
from core.errors import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    raw = (url or "").strip()
    parts = urlsplit(raw)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValidationError("url must be an absolute http(s) URL")
    return raw


class FetchClient:
    USER_AGENT = "ttl-lru-cache-mcp"

    def __init__(
        self,
        *,
        timeout: float = 20.0,
        verify: bool = False,
        cache_ttl_seconds: float = 60.0,
        cache_maxsize: int = 256,
    ) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)

        # One dedicated cache per client instance, keyed by URL
        self._get_text_cached = cacheable(
            ttl=float(cache_ttl_seconds),
            capacity=max(1, int(cache_maxsize)),
            key_generator=lambda url: url,
        )(self._get_text)

    @property
    def cache(self) -> TTLLRUCache[Any, Any]:
        return self._get_text_cached.cache

    async def fetch_text(self, url: str, *, max_chars: int = 200_000) -> str:
        """Fetch `url` as text (cached) and truncate to `max_chars`."""
        url_clean = normalize_url(url)
        n = int(max_chars)
        if n <= 0:
            raise ValidationError("max_chars must be positive")

        text = await self._get_text_cached(url_clean)
        return text[:n]

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self.USER_AGENT},
            timeout=self._timeout,
            verify=self._verify,
            follow_redirects=True,
        )

    async def _get_text(self, url: str) -> str:
        logger.debug("fetching %s", url)
        try:
            async with self._create_client() as c:
                r = await c.get(url)
                r.raise_for_status()
                return r.text or ""
        except httpx.HTTPStatusError as e:
            logger.warning("upstream returned an error for %s: %s", url, e)
            raise ExternalServiceError(f"Upstream returned an error: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("request to %s failed: %s", url, e)
            raise ExternalServiceError(f"Failed to fetch {url}: {e}") from e
