"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (shared
cache sizing, fetch client timeouts and limits, log level).
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Shared key-value store exposed through the cache_* tools
CACHE_CAPACITY = _env_int("CACHE_CAPACITY", 100)
CACHE_TTL_SECONDS = _env_float("CACHE_TTL_SECONDS", 0.0)

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", False)
FETCH_TIMEOUT = _env_float("FETCH_TIMEOUT", 20.0)

# Memoized fetches
FETCH_CACHE_TTL_SECONDS = _env_float("FETCH_CACHE_TTL_SECONDS", 60.0)
FETCH_CACHE_MAXSIZE = _env_int("FETCH_CACHE_MAXSIZE", 256)

# Limits / output
MAX_FETCH_CHARS = _env_int("MAX_FETCH_CHARS", 200_000)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
