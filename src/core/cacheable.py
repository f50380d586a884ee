"""Memoize a function's results in a dedicated TTLLRUCache.

Each decorated function owns one cache instance (exposed as `.cache`) and
only talks to it through get/set. Results that are None are not stored, and
exceptions from the wrapped function or the key generator propagate
unchanged, so failed calls are never cached.
"""

from __future__ import annotations

import functools
import inspect
import json
import math
from typing import Any, Callable, Optional, TypeVar

from core.cache import TTLLRUCache
from core.errors import ConfigurationError

F = TypeVar("F", bound=Callable[..., Any])

KeyGenerator = Callable[..., Any]

_MISSING = object()


def _encode_object(obj: Any) -> Any:
    # Objects with their own __repr__ keep it; plain objects are keyed by
    # type and attributes, never by the address in object.__repr__
    if type(obj).__repr__ is not object.__repr__:
        return repr(obj)
    try:
        state = vars(obj)
    except TypeError:
        raise TypeError(
            f"cannot derive a cache key from {type(obj).__qualname__} instance; pass key_generator"
        ) from None
    return {"__type__": f"{type(obj).__module__}.{type(obj).__qualname__}", **state}


def default_key(*args: Any, **kwargs: Any) -> str:
    # Canonical JSON of the call arguments
    payload: Any = list(args)
    if kwargs:
        payload = {"args": list(args), "kwargs": kwargs}
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=_encode_object)


def cacheable(
    *,
    ttl: float,
    capacity: int = 100,
    key_generator: Optional[KeyGenerator] = None,
) -> Callable[[F], F]:
    """Decorator factory: cache results of sync or async callables.

    Params:
      - ttl: lifetime of cached results in seconds (0 = no expiry).
      - capacity: maximum number of cached results (default 100).
      - key_generator: called with the same arguments as the wrapped
        function to derive the cache key (default: default_key).
    """
    try:
        ttl_seconds = float(ttl)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"ttl must be a number of seconds, got {ttl!r}") from e
    if not math.isfinite(ttl_seconds) or ttl_seconds < 0:
        raise ConfigurationError("ttl must be a non-negative number of seconds")

    make_key = key_generator or default_key

    def _decorator(fn: F) -> F:
        cache: TTLLRUCache[Any, Any] = TTLLRUCache(capacity=capacity, ttl=ttl_seconds)

        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def _async_wrapper(*args: Any, **kwargs: Any) -> Any:
                key = make_key(*args, **kwargs)
                cached = cache.get(key, _MISSING)
                if cached is not _MISSING:
                    return cached

                result = await fn(*args, **kwargs)
                if result is not None:
                    cache.set(key, result)
                return result

            _async_wrapper.cache = cache  # type: ignore[attr-defined]
            return _async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            key = make_key(*args, **kwargs)
            cached = cache.get(key, _MISSING)
            if cached is not _MISSING:
                return cached

            result = fn(*args, **kwargs)
            if result is not None:
                cache.set(key, result)
            return result

        _wrapper.cache = cache  # type: ignore[attr-defined]
        return _wrapper  # type: ignore[return-value]

    return _decorator
