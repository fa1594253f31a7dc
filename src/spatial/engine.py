"""
Privacy-preserving marker clustering for map views.

This module provides:
1. A change gate that decides between a cached result and a fresh pass
2. Grid binning at a zoom-dependent privacy radius
3. Status dominance per cell (minority statuses are never shown)
4. Stable per-cell marker positions across passes

Each map view owns one :class:`ClusteringEngine`; engines share no state.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .grid import bin_points, dominant_group
from .models import Cluster, DataPoint
from .result_cache import ResultCache, result_key
from .stability import StabilityCache
from .zoom_policy import zoom_to_radius


logger = logging.getLogger(__name__)

CHANGE_DETECTION_MODES = ("probe", "full")


def _finite_points(points: Sequence[DataPoint]) -> List[DataPoint]:
    """Drop points whose latitude or longitude is NaN or infinite."""
    valid = [p for p in points if p.coordinates.is_finite()]
    if len(valid) < len(points):
        logger.warning(
            "Discarding %d point(s) with non-finite coordinates", len(points) - len(valid)
        )
    return valid


@dataclass
class EngineConfig:
    """Tuning for the cache gate."""

    debounce_seconds: float = 0.3
    """Window after a fresh pass during which cached results may be reused."""

    zoom_tolerance: float = 0.5
    """Zoom movement (exclusive) still considered 'the same view'."""

    max_cached_results: int = 10
    """Result cache bound; a new key beyond it clears the whole cache."""

    change_probe_count: int = 3
    """Leading points compared by the 'probe' change detector."""

    change_detection: str = "probe"
    """'probe' compares count + leading points, 'full' compares every point."""

    def __post_init__(self):
        if self.debounce_seconds <= 0:
            raise ValueError(f"debounce_seconds must be positive, got {self.debounce_seconds}")
        if self.zoom_tolerance < 0:
            raise ValueError(f"zoom_tolerance must be >= 0, got {self.zoom_tolerance}")
        if self.max_cached_results < 1:
            raise ValueError(f"max_cached_results must be >= 1, got {self.max_cached_results}")
        if self.change_probe_count < 0:
            raise ValueError(f"change_probe_count must be >= 0, got {self.change_probe_count}")
        if self.change_detection not in CHANGE_DETECTION_MODES:
            raise ValueError(
                f"Unknown change_detection {self.change_detection!r}. "
                f"Expected one of: {', '.join(CHANGE_DETECTION_MODES)}"
            )

    @classmethod
    def from_profile(cls, profile: Dict[str, Any]) -> "EngineConfig":
        """Build from the ``clustering:`` section of a config profile."""
        section = profile.get("clustering") or {}
        defaults = cls()
        debounce_ms = section.get("debounce_ms")
        return cls(
            debounce_seconds=(
                debounce_ms / 1000.0 if debounce_ms is not None else defaults.debounce_seconds
            ),
            zoom_tolerance=section.get("zoom_tolerance", defaults.zoom_tolerance),
            max_cached_results=section.get("max_cached_results", defaults.max_cached_results),
            change_probe_count=section.get("change_probe_count", defaults.change_probe_count),
            change_detection=section.get("change_detection", defaults.change_detection),
        )


class ClusteringEngine:
    """
    Turns raw status points into aggregate clusters for one map view.

    All public methods hold the engine lock for their full duration, so a
    cache clear can never interleave with a read from another thread.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or EngineConfig()
        self._clock = clock
        self._lock = threading.RLock()
        self._stability = StabilityCache()
        self._results = ResultCache(
            max_entries=self.config.max_cached_results,
            ttl_seconds=self.config.debounce_seconds,
            timer=clock,
        )
        self._last_points: Optional[List[DataPoint]] = None
        self._last_zoom: Optional[float] = None
        self._last_computed_at: Optional[float] = None

    # -----------------------------
    # Public API
    # -----------------------------

    def cluster(self, points: Sequence[DataPoint], zoom_level: float) -> List[Cluster]:
        """
        Cluster ``points`` for display at ``zoom_level``.

        Returns the previously computed list object unchanged when the data
        looks unchanged, the last pass was within the debounce window and the
        zoom moved less than the tolerance.

        Raises:
            ValueError: If ``zoom_level`` is not finite
        """
        if not points:
            return []
        if not math.isfinite(zoom_level):
            raise ValueError(f"zoom_level must be finite, got {zoom_level}")

        valid = _finite_points(points)
        if not valid:
            return []

        with self._lock:
            key = result_key(len(valid), zoom_level)

            if self._data_changed(valid):
                logger.debug("Point set changed (%d points); clearing caches", len(valid))
                self._stability.clear()
                self._results.clear()
                self._last_points = list(valid)
            elif self._within_debounce(zoom_level):
                cached = self._results.get(key)
                if cached is not None:
                    logger.debug("Result cache hit for %s", key)
                    return cached
                logger.debug("Result cache miss for %s", key)

            clusters = self._compute(valid, zoom_level)

            self._last_zoom = zoom_level
            self._last_computed_at = self._clock()
            self._results.put(key, clusters)
            return clusters

    def clear_cache(self) -> None:
        """Empty both caches, e.g. after a new upstream search or filter."""
        with self._lock:
            self._stability.clear()
            self._results.clear()
            logger.debug("Clustering caches cleared")

    def should_recompute(self, points: Sequence[DataPoint], zoom_level: float) -> bool:
        """Whether :meth:`cluster` would run a fresh pass for these inputs."""
        valid = _finite_points(points)
        if not valid:
            return False
        with self._lock:
            if self._data_changed(valid):
                return True
            if not self._within_debounce(zoom_level):
                return True
            return self._results.get(result_key(len(valid), zoom_level)) is None

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "stable_cells": len(self._stability),
                "result_cache": self._results.stats(),
                "last_zoom": self._last_zoom,
                "last_point_count": len(self._last_points) if self._last_points is not None else 0,
            }

    # -----------------------------
    # Gate
    # -----------------------------

    def _data_changed(self, points: Sequence[DataPoint]) -> bool:
        last = self._last_points
        if last is None or len(points) != len(last):
            return True

        if self.config.change_detection == "full":
            return any(
                a.coordinates != b.coordinates or a.label != b.label
                for a, b in zip(points, last)
            )

        probe = min(self.config.change_probe_count, len(points))
        for i in range(probe):
            if points[i].coordinates != last[i].coordinates:
                return True
        return False

    def _within_debounce(self, zoom_level: float) -> bool:
        if self._last_computed_at is None or self._last_zoom is None:
            return False
        elapsed = self._clock() - self._last_computed_at
        return (
            elapsed < self.config.debounce_seconds
            and abs(zoom_level - self._last_zoom) < self.config.zoom_tolerance
        )

    # -----------------------------
    # Clustering pass
    # -----------------------------

    def _compute(self, points: Sequence[DataPoint], zoom_level: float) -> List[Cluster]:
        level, radius = zoom_to_radius(zoom_level)
        cells = bin_points(points, level, radius)

        clusters: List[Cluster] = []
        for key, cell_points in cells.items():
            status, group = dominant_group(cell_points)
            if not group:
                continue

            clusters.append(
                Cluster(
                    id=f"stable_{key}_{status}",
                    position=self._stability.stable_position(key, group),
                    data_points=group,
                    count=len(group),
                    radius_meters=radius,
                    dominant_status=status,
                    level=level,
                    total_user_count=sum(p.density for p in group),
                )
            )

        if logger.isEnabledFor(logging.DEBUG):
            dropped = len(points) - sum(c.count for c in clusters)
            logger.debug(
                "Clustered %d points into %d clusters at zoom %.2f "
                "(level %d, radius %.0fm, %d minority points hidden)",
                len(points), len(clusters), zoom_level, level, radius, dropped,
            )
        return clusters
