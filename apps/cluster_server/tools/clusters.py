"""Glue between the HTTP models and :mod:`src.spatial`."""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, List, Optional

from cachetools import TTLCache

from src.spatial import (
    Cluster,
    ClusteringEngine,
    DataPoint,
    EngineConfig,
    GeoPoint,
    marker_color,
    marker_size,
    status_legend,
)
from src.tools.config_loader import ConfigLoader

from ..schemas.models import ClusterOut, DataPointIn, LatLng, LegendItem


DEFAULT_MAX_VIEWS = 256
DEFAULT_VIEW_TTL_SECONDS = 30 * 60


def _server_settings(profile: Dict[str, Any]) -> Dict[str, Any]:
    server_cfg = profile.get("server") or {}
    return {
        "max_views": server_cfg.get("max_views", DEFAULT_MAX_VIEWS),
        "view_ttl_seconds": server_cfg.get("view_ttl_seconds", DEFAULT_VIEW_TTL_SECONDS),
    }


def _new_registry(max_views: Optional[int] = None, ttl_seconds: Optional[float] = None) -> TTLCache:
    settings = _server_settings(ConfigLoader.load_default_or_env_profile())
    return TTLCache(
        maxsize=max_views or settings["max_views"],
        ttl=ttl_seconds or settings["view_ttl_seconds"],
    )


def _engine_config() -> EngineConfig:
    return EngineConfig.from_profile(ConfigLoader.load_default_or_env_profile())


# One engine per map view; least recently used and idle views are evicted
_engines: TTLCache = _new_registry()
_engines_lock = threading.Lock()


def get_engine(view_id: str) -> ClusteringEngine:
    """Return the engine for ``view_id``, creating it from the active profile."""
    with _engines_lock:
        engine = _engines.get(view_id)
        if engine is None:
            engine = ClusteringEngine(_engine_config())
        # Re-inserting refreshes the idle timer
        _engines[view_id] = engine
        return engine


def find_engine(view_id: str) -> Optional[ClusteringEngine]:
    with _engines_lock:
        return _engines.get(view_id)


def reset_engines(max_views: Optional[int] = None, ttl_seconds: Optional[float] = None) -> None:
    """Forget every view's engine, optionally resizing the registry."""
    global _engines
    with _engines_lock:
        _engines = _new_registry(max_views, ttl_seconds)


def engine_count() -> int:
    with _engines_lock:
        return len(_engines)


def points_from_models(points: Iterable[DataPointIn]) -> List[DataPoint]:
    return [
        DataPoint(
            coordinates=GeoPoint(p.coordinates.latitude, p.coordinates.longitude),
            label=p.label,
            density=p.density,
        )
        for p in points
    ]


def _point_model(point: DataPoint) -> DataPointIn:
    return DataPointIn(
        coordinates=LatLng(
            latitude=point.coordinates.latitude,
            longitude=point.coordinates.longitude,
        ),
        label=point.label,
        density=point.density,
    )


def cluster_models(clusters: Iterable[Cluster]) -> List[ClusterOut]:
    """Convert engine clusters into response models with marker styling."""
    return [
        ClusterOut(
            id=c.id,
            position=LatLng(latitude=c.position.latitude, longitude=c.position.longitude),
            count=c.count,
            radiusMeters=c.radius_meters,
            dominantStatus=c.dominant_status,
            totalUserCount=c.total_user_count,
            level=c.level,
            markerSize=marker_size(c.count),
            markerColor=marker_color(c.dominant_status).value,
            dataPoints=[_point_model(p) for p in c.data_points],
        )
        for c in clusters
    ]


def legend_models() -> List[LegendItem]:
    return [
        LegendItem(status=entry.status, title=entry.title, color=entry.color.value)
        for entry in status_legend()
    ]
