"""Zoom level to aggregation level and minimum privacy radius."""

from __future__ import annotations

from typing import List, Tuple


# (max zoom inclusive, cluster level, radius in metres), increasing zoom
ZOOM_THRESHOLDS: List[Tuple[float, int, float]] = [
    (6.0, 0, 200_000.0),
    (8.0, 1, 75_000.0),
    (10.0, 2, 30_000.0),
    (12.0, 3, 15_000.0),
    (14.0, 4, 7_000.0),
    (16.0, 5, 3_000.0),
]

MAX_CLUSTER_LEVEL = 6

# Privacy floor: no marker ever aggregates over less than this radius
MIN_RADIUS_METERS = 1_200.0

# (max search radius km inclusive, initial camera zoom)
RADIUS_KM_ZOOMS: List[Tuple[float, float]] = [
    (5, 14.0),
    (10, 13.0),
    (25, 11.0),
    (50, 10.0),
    (100, 9.0),
    (200, 8.0),
]

DEFAULT_WIDE_ZOOM = 6.0


def zoom_to_radius(zoom_level: float) -> Tuple[int, float]:
    """
    Map a continuous zoom level to ``(cluster_level, radius_meters)``.

    Anything past the last threshold (including NaN) lands in the finest
    bucket, which still respects :data:`MIN_RADIUS_METERS`.

    Example:
        >>> zoom_to_radius(11)
        (3, 15000.0)
    """
    for max_zoom, level, radius in ZOOM_THRESHOLDS:
        if zoom_level <= max_zoom:
            return level, radius
    return MAX_CLUSTER_LEVEL, MIN_RADIUS_METERS


def zoom_for_radius_km(radius_km: float) -> float:
    """Initial camera zoom for a search radius given in kilometres."""
    for max_km, zoom in RADIUS_KM_ZOOMS:
        if radius_km <= max_km:
            return zoom
    return DEFAULT_WIDE_ZOOM
