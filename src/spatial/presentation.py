"""Marker sizing and colouring for rendered clusters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class ColorToken(Enum):
    """Colour tokens understood by the map renderer."""

    GREEN = "green"
    ORANGE = "orange"
    BLUE = "blue"
    RED = "red"
    DEFAULT = "default"


# (max count inclusive, marker size in presentation units)
MARKER_SIZE_STEPS: List[Tuple[int, float]] = [
    (5, 40.0),
    (10, 50.0),
    (25, 60.0),
    (50, 70.0),
]
MAX_MARKER_SIZE = 80.0

STATUS_COLORS: Dict[str, ColorToken] = {
    "matched": ColorToken.GREEN,
    "liked_me": ColorToken.ORANGE,
    "likedme": ColorToken.ORANGE,
    "available": ColorToken.BLUE,
    "unmatched": ColorToken.BLUE,
    "passed": ColorToken.RED,
}


@dataclass(frozen=True)
class LegendEntry:
    status: str
    title: str
    color: ColorToken


STATUS_LEGEND: List[LegendEntry] = [
    LegendEntry("matched", "Matched", ColorToken.GREEN),
    LegendEntry("liked_me", "Liked Me", ColorToken.ORANGE),
    LegendEntry("available", "Available", ColorToken.BLUE),
    LegendEntry("passed", "Passed", ColorToken.RED),
]


def marker_size(count: int) -> float:
    """Step function from cluster point count to marker size."""
    for max_count, size in MARKER_SIZE_STEPS:
        if count <= max_count:
            return size
    return MAX_MARKER_SIZE


def marker_color(label: str | None) -> ColorToken:
    """Colour for a status label; unknown labels get :attr:`ColorToken.DEFAULT`."""
    if not label:
        return ColorToken.DEFAULT
    return STATUS_COLORS.get(label.strip().lower(), ColorToken.DEFAULT)


def status_legend() -> List[LegendEntry]:
    return list(STATUS_LEGEND)
