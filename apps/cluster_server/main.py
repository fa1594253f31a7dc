"""FastAPI server exposing privacy-preserving map clustering."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas.models import (
    ClearCacheRequest,
    ClusterRequest,
    ClusterResponse,
    LegendResponse,
)
from .tools.clusters import (
    cluster_models,
    find_engine,
    get_engine,
    legend_models,
    points_from_models,
)
from src.spatial import zoom_for_radius_km, zoom_to_radius
from src.tools.config_loader import ConfigLoader


_profile = ConfigLoader.load_default_or_env_profile()
logging.basicConfig(level=(_profile.get("logging") or {}).get("level", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(title="Map Cluster Server", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/cluster")
async def cluster_action(request: ClusterRequest) -> Dict[str, Any]:
    if request.zoom_level is not None:
        zoom = request.zoom_level
    elif request.radius_km is not None:
        zoom = zoom_for_radius_km(request.radius_km)
    else:
        raise HTTPException(status_code=422, detail="Either zoomLevel or radiusKm is required.")

    engine = get_engine(request.view_id)
    clusters = engine.cluster(points_from_models(request.points), zoom)
    level, radius = zoom_to_radius(zoom)

    response = ClusterResponse(
        clusters=cluster_models(clusters),
        zoomLevel=zoom,
        level=level,
        radiusMeters=radius,
    )
    return response.model_dump(by_alias=True)


@app.post("/cluster/clear")
async def clear_cache_action(request: ClearCacheRequest) -> Dict[str, Any]:
    engine = find_engine(request.view_id)
    if engine is not None:
        engine.clear_cache()
    return {"cleared": True, "viewId": request.view_id}


@app.get("/cluster/stats")
async def cluster_stats(viewId: str = "default") -> Dict[str, Any]:
    engine = find_engine(viewId)
    if engine is None:
        raise HTTPException(status_code=404, detail=f"Unknown view '{viewId}'.")
    return engine.stats()


@app.get("/legend")
async def legend() -> Dict[str, Any]:
    return LegendResponse(items=legend_models()).model_dump()


__all__ = ["app"]
