"""
Pytest configuration and shared fixtures for map clustering tests.

This file provides:
- Sample status points (Cape Town, Tokyo)
- A controllable clock for debounce tests
- Engine fixtures wired to that clock
"""

from typing import List

import pytest

from src.spatial import ClusteringEngine, DataPoint, EngineConfig, GeoPoint


# ==============================================================================
# Clock
# ==============================================================================

class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ==============================================================================
# Engines
# ==============================================================================

@pytest.fixture
def engine(clock) -> ClusteringEngine:
    """Engine with default config driven by the fake clock."""
    return ClusteringEngine(EngineConfig(), clock=clock)


@pytest.fixture
def full_diff_engine(clock) -> ClusteringEngine:
    return ClusteringEngine(EngineConfig(change_detection="full"), clock=clock)


# ==============================================================================
# Sample Points
# ==============================================================================

def make_point(lat: float, lng: float, label=None, density: int = 1) -> DataPoint:
    return DataPoint(coordinates=GeoPoint(lat, lng), label=label, density=density)


@pytest.fixture
def cape_town_points() -> List[DataPoint]:
    """Five points within ~1km of central Cape Town, mostly matched."""
    return [
        make_point(-33.920, 18.420, "matched"),
        make_point(-33.922, 18.423, "matched"),
        make_point(-33.925, 18.421, "matched"),
        make_point(-33.921, 18.426, "liked_me"),
        make_point(-33.924, 18.424, "passed"),
    ]


@pytest.fixture
def tokyo_points() -> List[DataPoint]:
    """Two well separated groups in Tokyo with mixed statuses."""
    return [
        make_point(35.6812, 139.7671, "available"),
        make_point(35.6815, 139.7675, "available"),
        make_point(35.6820, 139.7680, "passed"),
        make_point(35.7148, 139.7967, "liked_me", density=4),
        make_point(35.7150, 139.7970, "liked_me", density=2),
    ]


# ==============================================================================
# Utilities
# ==============================================================================

def assert_approx_equal(a: float, b: float, tolerance: float = 1e-9):
    """Assert two floats are approximately equal."""
    assert abs(a - b) < tolerance, f"{a} != {b} (tolerance={tolerance})"
