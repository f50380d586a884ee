"""MCP tool that fetches a URL as text through the memoizing FetchClient."""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from clients.fetch_client import FetchClient
from config import FETCH_CACHE_MAXSIZE, FETCH_CACHE_TTL_SECONDS, FETCH_TIMEOUT, HTTP_VERIFY, MAX_FETCH_CHARS
from core.errors import ValidationError


def register(mcp: FastMCP, *, fetch_client: Optional[FetchClient] = None) -> None:
    client = fetch_client or FetchClient(
        timeout=FETCH_TIMEOUT,
        verify=HTTP_VERIFY,
        cache_ttl_seconds=FETCH_CACHE_TTL_SECONDS,
        cache_maxsize=FETCH_CACHE_MAXSIZE,
    )

    @mcp.tool(name="fetch_url")
    async def fetch_url(url: str = "", max_chars: int = MAX_FETCH_CHARS) -> str:
        """Fetch an http(s) URL and return its body as text.

        Responses are cached per URL for FETCH_CACHE_TTL_SECONDS; failed
        requests are not cached.

        Raises:
          ValidationError for a missing/invalid URL or max_chars, and
          ExternalServiceError when the upstream request fails.
        """
        if not url or not url.strip():
            raise ValidationError("Missing url")

        return await client.fetch_text(url, max_chars=max_chars)
