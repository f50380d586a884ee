"""Server bootstrap for the TTL/LRU cache MCP service.

Creates the FastMCP instance, builds the shared cache and fetch client,
registers the tools, and starts the MCP server (stdio transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from clients.fetch_client import FetchClient
from config import (
    CACHE_CAPACITY,
    CACHE_TTL_SECONDS,
    FETCH_CACHE_MAXSIZE,
    FETCH_CACHE_TTL_SECONDS,
    FETCH_TIMEOUT,
    HTTP_VERIFY,
    LOG_LEVEL,
)
from core.cache import TTLLRUCache
from core.events import EvictionStats

from tools.cache_tools import register as register_cache_tools
from tools.fetch_url import register as register_fetch_url

mcp = FastMCP("ttl-lru-cache")


def register_tools() -> None:
    store: TTLLRUCache[str, str] = TTLLRUCache(capacity=CACHE_CAPACITY, ttl=CACHE_TTL_SECONDS)
    stats = EvictionStats()
    store.subscribe(stats)

    fetch_client = FetchClient(
        timeout=FETCH_TIMEOUT,
        verify=HTTP_VERIFY,
        cache_ttl_seconds=FETCH_CACHE_TTL_SECONDS,
        cache_maxsize=FETCH_CACHE_MAXSIZE,
    )

    register_cache_tools(mcp, cache=store, stats=stats)
    register_fetch_url(mcp, fetch_client=fetch_client)


register_tools()


def main() -> None:
    # stdout carries the stdio transport; logs go to stderr
    logging.basicConfig(
        level=LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
