"""Per-cell centroid memory that keeps markers from jumping between passes."""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from .models import DataPoint, GeoPoint


class StabilityCache:
    """
    Remembers the first centroid computed for each grid cell key.

    Once recorded, a key's position never changes until :meth:`clear`.
    There is no per-key eviction.
    """

    def __init__(self):
        self._positions: Dict[str, GeoPoint] = {}

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, key: str) -> bool:
        return key in self._positions

    def get(self, key: str) -> GeoPoint | None:
        return self._positions.get(key)

    def stable_position(self, key: str, points: Sequence[DataPoint]) -> GeoPoint:
        """
        Return the recorded centroid for ``key``, recording the mean of
        ``points`` first if the key is new.

        Raises:
            ValueError: If the key is new and ``points`` is empty
        """
        cached = self._positions.get(key)
        if cached is not None:
            return cached

        if not points:
            raise ValueError(f"Cannot compute a centroid for empty cell {key!r}")

        coords = np.array(
            [(p.coordinates.latitude, p.coordinates.longitude) for p in points],
            dtype=float,
        )
        lat, lng = coords.mean(axis=0)
        position = GeoPoint(latitude=float(lat), longitude=float(lng))
        self._positions[key] = position
        return position

    def clear(self) -> None:
        self._positions.clear()
