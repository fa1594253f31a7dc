"""
Short-lived cache of finished cluster lists.

Entries are keyed by ``(point_count, quantized_zoom)`` and live for one
debounce window. When a new key would push the cache past its bound the
whole cache is dropped rather than evicting a single entry.
"""

from __future__ import annotations

import math
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from cachetools import TTLCache

from .models import Cluster


ResultKey = Tuple[int, int]

DEFAULT_MAX_ENTRIES = 10
DEFAULT_TTL_SECONDS = 0.3


def quantize_zoom(zoom_level: float) -> int:
    """Bucket a zoom level to 0.5 precision (``round(zoom * 2)``, halves away from zero)."""
    scaled = zoom_level * 2
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def result_key(point_count: int, zoom_level: float) -> ResultKey:
    return (point_count, quantize_zoom(zoom_level))


class ResultCache:
    """Bounded TTL cache of cluster lists with clear-on-overflow."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        # One spare slot so TTLCache never evicts on its own
        self._cache: TTLCache = TTLCache(maxsize=max_entries + 1, ttl=ttl_seconds, timer=timer)
        self.overflow_clears = 0

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)

    def get(self, key: ResultKey) -> Optional[List[Cluster]]:
        return self._cache.get(key)

    def put(self, key: ResultKey, clusters: List[Cluster]) -> None:
        """Store ``clusters``; clears everything first if ``key`` is new and the cache is full."""
        self._cache.expire()
        if key not in self._cache and len(self._cache) >= self.max_entries:
            self._cache.clear()
            self.overflow_clears += 1
        self._cache[key] = clusters

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> Dict[str, Any]:
        return {
            "size": len(self),
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
            "overflow_clears": self.overflow_clears,
        }
