"""Memoisation of derived instance geometry across layout passes.

Layout passes are stateless; this cache only skips recomputing an instance's
obstacle box when its template bounds, placement and padding are unchanged.
Results are identical with or without it.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any

from .logging_config import create_logger

logger = create_logger(__name__)


class LRUCache:
    """Simple LRU cache with hit/miss statistics."""

    def __init__(self, max_size: int = 512):
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries, at least 1.

        Raises:
            ValueError: if ``max_size`` is below 1.
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._cache: OrderedDict[Hashable, Any] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._cache

    def get(self, key: Hashable) -> Any | None:
        """Get a value from the cache."""
        if key not in self._cache:
            self._misses += 1
            return None

        self._cache.move_to_end(key)
        self._hits += 1
        return self._cache[key]

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, computing and storing it on a miss.

        Unlike :meth:`get`, a cached ``None`` counts as a hit.
        """
        if key in self._cache:
            self._cache.move_to_end(key)
            self._hits += 1
            return self._cache[key]

        self._misses += 1
        value = compute()
        self.set(key, value)
        return value

    def set(self, key: Hashable, value: Any) -> None:
        """Set a value in the cache, evicting the least recently used entry if full."""
        if key in self._cache:
            self._cache.move_to_end(key)

        while len(self._cache) >= self.max_size and key not in self._cache:
            oldest_key = next(iter(self._cache))
            del self._cache[oldest_key]
            logger.debug(f"Evicted cache key: {oldest_key}")

        self._cache[key] = value

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Geometry cache cleared")

    @property
    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        return {
            "hit_rate": self._hits / total if total > 0 else 0.0,
            "size": len(self._cache),
            "max_size": self.max_size,
            "hits": self._hits,
            "misses": self._misses,
        }

    def __len__(self) -> int:
        return len(self._cache)


_aabb_cache = LRUCache(max_size=512)


def get_aabb_cache() -> LRUCache:
    """Get the shared instance-AABB cache."""
    return _aabb_cache


def clear_all_caches() -> None:
    _aabb_cache.clear()
