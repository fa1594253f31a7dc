"""
Grid binning and per-cell status dominance.

Cells are fixed lat/lng squares anchored at the origin, so a point's cell
depends only on its own position and the level, never on the viewport.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np

from .models import DataPoint


# Degrees per kilometre used for the cell size approximation
DEGREES_PER_KM = 0.01


def cell_size_degrees(radius_meters: float) -> float:
    """Linear (non-geodesic) cell edge in degrees for ``radius_meters``."""
    return radius_meters / 1000.0 * DEGREES_PER_KM


def cell_key(level: int, grid_lat: int, grid_lng: int) -> str:
    return f"L{level}_{grid_lat}_{grid_lng}"


def grid_indices(points: Sequence[DataPoint], cell_size: float) -> np.ndarray:
    """Return an ``(n, 2)`` integer array of ``[grid_lat, grid_lng]`` per point."""
    if not points:
        return np.empty((0, 2), dtype=np.int64)

    coords = np.array(
        [(p.coordinates.latitude, p.coordinates.longitude) for p in points],
        dtype=float,
    )
    return np.floor(coords / cell_size).astype(np.int64)


def bin_points(
    points: Sequence[DataPoint],
    level: int,
    radius_meters: float,
) -> Dict[str, List[DataPoint]]:
    """
    Group points by grid cell key.

    Keys appear in order of their first point so the downstream output order
    is reproducible for a given input order.
    """
    cell_size = cell_size_degrees(radius_meters)
    indices = grid_indices(points, cell_size)

    cells: Dict[str, List[DataPoint]] = {}
    for point, (grid_lat, grid_lng) in zip(points, indices):
        key = cell_key(level, int(grid_lat), int(grid_lng))
        cells.setdefault(key, []).append(point)
    return cells


def group_by_status(points: Sequence[DataPoint]) -> Dict[str, List[DataPoint]]:
    """Partition points by status label, preserving first-seen label order."""
    groups: Dict[str, List[DataPoint]] = {}
    for point in points:
        groups.setdefault(point.status, []).append(point)
    return groups


def dominant_group(points: Sequence[DataPoint]) -> Tuple[str, List[DataPoint]]:
    """
    Pick the status with the strictly largest count.

    Ties go to the label encountered first. Minority statuses are dropped
    entirely so a cell never exposes a small subgroup.

    Returns:
        (dominant_label, points_with_that_label); ``("", [])`` for no points
    """
    best_label = ""
    best_points: List[DataPoint] = []
    for label, group in group_by_status(points).items():
        if len(group) > len(best_points):
            best_label, best_points = label, group
    return best_label, best_points
