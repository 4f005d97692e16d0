"""
In-memory TTL cache for upstream responses.

Backed by `cachetools.TTLCache` with no size bound: the key space is finite
(document ids, URLs) and entries only live for the process lifetime.
Expiry is checked on read. Concurrent misses for the same key are not
deduplicated; every upstream read is idempotent so a duplicate fetch is harmless.
"""

from __future__ import annotations

import math
import time
from typing import Any, Awaitable, Callable, Hashable, TypeVar

from cachetools import TTLCache

T = TypeVar("T")

# `None` is a valid cached value (e.g. "this Pokemon has no Hebrew page").
MISSING: Any = object()


class TimedCache:
    def __init__(
        self,
        ttl_s: float,
        *,
        name: str = "cache",
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be > 0.")
        self.name = name
        self.ttl_s = float(ttl_s)
        self._entries: TTLCache = TTLCache(maxsize=math.inf, ttl=self.ttl_s, timer=timer)

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Hashable, value: T) -> T:
        """
        Store `value` and return it, so callers can `return cache.set(k, v)`.
        """
        self._entries[key] = value
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)


async def fetch_cached(cache: TimedCache, key: Hashable, fetch: Callable[[], Awaitable[T]]) -> T:
    """
    Return the cached value for `key`, or await `fetch()` and cache its result.

    Exceptions from `fetch` propagate and nothing is cached.
    """
    hit = cache.get(key, MISSING)
    if hit is not MISSING:
        return hit
    return cache.set(key, await fetch())
