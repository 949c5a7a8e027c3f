"""Caching utilities for ofcov."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

_K = TypeVar("_K", bound=Hashable)
_V = TypeVar("_V")


class MemoryCache(Generic[_K, _V]):
    """In-memory LRU cache.

    Uses a plain ``dict`` (insertion-ordered) for LRU eviction via
    delete-and-reinsert.  Not thread-safe.

    Args:
        max_size: Maximum number of entries before LRU eviction.
    """

    def __init__(self, max_size: int = 128) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1 (got: {max_size})")
        self._max_size = max_size
        self._store: dict[_K, _V] = {}

    def get(self, key: _K) -> _V | None:
        """Return cached value or ``None`` if missing."""
        if key not in self._store:
            return None
        # Move to end for LRU (delete + re-insert preserves insertion order)
        value = self._store.pop(key)
        self._store[key] = value
        return value

    def put(self, key: _K, value: _V) -> None:
        """Store a value, evicting the oldest entry if at capacity."""
        if key in self._store:
            del self._store[key]
        elif len(self._store) >= self._max_size:
            oldest = next(iter(self._store))
            del self._store[oldest]
            logger.debug("Evicted %s from cache", oldest)
        self._store[key] = value

    def invalidate(self, key: _K) -> None:
        """Remove a specific key."""
        self._store.pop(key, None)

    def clear(self) -> None:
        """Remove all entries."""
        self._store.clear()

    @property
    def size(self) -> int:
        """Number of entries currently held."""
        return len(self._store)
