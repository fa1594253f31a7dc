"""
Unit Tests for the zoom policy (src/spatial/zoom_policy.py)
"""

import math

import pytest

from src.spatial.zoom_policy import (
    MIN_RADIUS_METERS,
    ZOOM_THRESHOLDS,
    zoom_for_radius_km,
    zoom_to_radius,
)


class TestZoomToRadius:
    """Test zoom to (level, radius) mapping."""

    @pytest.mark.parametrize("zoom,expected", [
        (0, (0, 200_000.0)),
        (6, (0, 200_000.0)),
        (6.01, (1, 75_000.0)),
        (8, (1, 75_000.0)),
        (10, (2, 30_000.0)),
        (11, (3, 15_000.0)),
        (12, (3, 15_000.0)),
        (14, (4, 7_000.0)),
        (16, (5, 3_000.0)),
        (16.5, (6, 1_200.0)),
        (21, (6, 1_200.0)),
    ])
    def test_thresholds_are_inclusive(self, zoom, expected):
        assert zoom_to_radius(zoom) == expected

    def test_radius_is_monotonic(self):
        """Zooming in never widens the aggregation radius."""
        zooms = [z / 4 for z in range(-8, 100)]
        radii = [zoom_to_radius(z)[1] for z in zooms]
        assert all(a >= b for a, b in zip(radii, radii[1:]))

    def test_level_is_monotonic(self):
        zooms = [z / 4 for z in range(-8, 100)]
        levels = [zoom_to_radius(z)[0] for z in zooms]
        assert all(a <= b for a, b in zip(levels, levels[1:]))
        assert min(levels) == 0
        assert max(levels) == 6

    def test_privacy_floor(self):
        """No zoom, however extreme, goes below the privacy floor."""
        for zoom in [-50, 0, 7.3, 15.9, 16.0001, 25, 1e9]:
            assert zoom_to_radius(zoom)[1] >= MIN_RADIUS_METERS
        assert all(radius >= MIN_RADIUS_METERS for _, _, radius in ZOOM_THRESHOLDS)

    def test_nan_falls_into_finest_bucket(self):
        assert zoom_to_radius(math.nan) == (6, MIN_RADIUS_METERS)


class TestZoomForRadius:
    """Test initial camera zoom for a search radius."""

    @pytest.mark.parametrize("radius_km,zoom", [
        (1, 14.0),
        (5, 14.0),
        (10, 13.0),
        (25, 11.0),
        (50, 10.0),
        (100, 9.0),
        (200, 8.0),
        (500, 6.0),
    ])
    def test_radius_buckets(self, radius_km, zoom):
        assert zoom_for_radius_km(radius_km) == zoom
