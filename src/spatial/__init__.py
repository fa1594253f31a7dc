"""
src/spatial: Privacy-preserving grid clustering for map markers.

This module turns geo-tagged status points into stable aggregate clusters
whose radius never drops below a privacy floor.
"""

from .engine import (
    ClusteringEngine,
    EngineConfig,
)
from .grid import (
    bin_points,
    cell_key,
    cell_size_degrees,
    dominant_group,
)
from .models import (
    Cluster,
    DataPoint,
    GeoPoint,
    UNKNOWN_LABEL,
    points_from_frame,
)
from .presentation import (
    ColorToken,
    LegendEntry,
    marker_color,
    marker_size,
    status_legend,
)
from .result_cache import ResultCache, quantize_zoom, result_key
from .stability import StabilityCache
from .zoom_policy import (
    MIN_RADIUS_METERS,
    zoom_for_radius_km,
    zoom_to_radius,
)

__all__ = [
    # Engine
    "ClusteringEngine",
    "EngineConfig",

    # Grid
    "bin_points",
    "cell_key",
    "cell_size_degrees",
    "dominant_group",

    # Data models
    "Cluster",
    "DataPoint",
    "GeoPoint",
    "UNKNOWN_LABEL",
    "points_from_frame",

    # Presentation
    "ColorToken",
    "LegendEntry",
    "marker_color",
    "marker_size",
    "status_legend",

    # Caches
    "ResultCache",
    "StabilityCache",
    "quantize_zoom",
    "result_key",

    # Zoom policy
    "MIN_RADIUS_METERS",
    "zoom_for_radius_km",
    "zoom_to_radius",
]
