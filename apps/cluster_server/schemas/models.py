"""Pydantic models for the cluster server."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """Latitude/longitude container in the map layer's naming."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class DataPointIn(BaseModel):
    coordinates: LatLng
    label: Optional[str] = Field(default=None, description="Relationship status")
    density: int = Field(1, ge=1, description="Users represented by this point")


class ClusterRequest(BaseModel):
    points: List[DataPointIn] = Field(default_factory=list)
    zoom_level: Optional[float] = Field(
        default=None, alias="zoomLevel", allow_inf_nan=False, description="Camera zoom"
    )
    radius_km: Optional[float] = Field(
        default=None,
        alias="radiusKm",
        gt=0,
        allow_inf_nan=False,
        description="Search radius; used to derive a zoom when zoomLevel is absent",
    )
    view_id: str = Field("default", alias="viewId", min_length=1, max_length=128)

    model_config = {"populate_by_name": True}


class ClearCacheRequest(BaseModel):
    view_id: str = Field("default", alias="viewId", min_length=1, max_length=128)

    model_config = {"populate_by_name": True}


class ClusterOut(BaseModel):
    id: str
    position: LatLng
    count: int
    radius_meters: float = Field(..., alias="radiusMeters")
    dominant_status: str = Field(..., alias="dominantStatus")
    total_user_count: int = Field(..., alias="totalUserCount")
    level: int
    marker_size: float = Field(..., alias="markerSize")
    marker_color: str = Field(..., alias="markerColor")
    data_points: List[DataPointIn] = Field(default_factory=list, alias="dataPoints")

    model_config = {"populate_by_name": True}


class ClusterResponse(BaseModel):
    clusters: List[ClusterOut]
    zoom_level: float = Field(..., alias="zoomLevel")
    level: int
    radius_meters: float = Field(..., alias="radiusMeters")

    model_config = {"populate_by_name": True}


class LegendItem(BaseModel):
    status: str
    title: str
    color: str


class LegendResponse(BaseModel):
    items: List[LegendItem]
