"""
Value types shared by the clustering engine and its callers.

Points arrive either as stored snapshots (``coordinates`` + ``density``) or
straight from the heat map API (``latitude``/``longitude``/``count``/``status``);
both are normalised into :class:`DataPoint`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd


UNKNOWN_LABEL = "unknown"


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class DataPoint:
    """
    A geo-tagged status sample supplied by the caller.

    Attributes:
        coordinates: Location of the sample
        label: Relationship status (``matched``, ``liked_me``, ...); ``None``
            is reported as ``unknown``
        density: Number of users the sample stands for
    """

    coordinates: GeoPoint
    label: Optional[str] = None
    density: int = 1

    @property
    def status(self) -> str:
        """Label used for grouping, with the ``unknown`` fallback applied."""
        return self.label or UNKNOWN_LABEL

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "coordinates": self.coordinates.to_dict(),
            "density": self.density,
        }
        if self.label is not None:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataPoint":
        """
        Build a point from either supported payload shape.

        Stored format: ``{"coordinates": {"latitude", "longitude"}, "density", "label"}``
        API format:    ``{"latitude", "longitude", "count", "status"}``

        Raises:
            ValueError: If no coordinates can be found
        """
        if "coordinates" in data:
            coords = data["coordinates"] or {}
            lat, lng = coords.get("latitude"), coords.get("longitude")
            density = data.get("density", 1)
            label = data.get("label")
        else:
            lat, lng = data.get("latitude"), data.get("longitude")
            density = data.get("count", 1)
            label = data.get("status")

        if lat is None or lng is None:
            raise ValueError(
                f"Data point is missing latitude/longitude: {sorted(data.keys())}"
            )

        return cls(
            coordinates=GeoPoint(latitude=float(lat), longitude=float(lng)),
            label=label,
            density=int(density) if density is not None else 1,
        )


@dataclass
class Cluster:
    """
    One aggregate marker covering the dominant-status points of a grid cell.

    ``position`` is the cell's remembered centroid, which can differ from the
    mean of ``data_points`` once points have moved inside the cell.
    """

    id: str
    position: GeoPoint
    data_points: List[DataPoint]
    count: int
    radius_meters: float
    dominant_status: str = UNKNOWN_LABEL
    level: int = 0
    total_user_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "count": self.count,
            "radiusMeters": self.radius_meters,
            "dominantStatus": self.dominant_status,
            "level": self.level,
            "totalUserCount": self.total_user_count,
            "dataPoints": [p.to_dict() for p in self.data_points],
        }


def points_from_frame(
    df: pd.DataFrame,
    *,
    lat_col: str = "latitude",
    lng_col: str = "longitude",
    label_col: Optional[str] = "label",
    density_col: Optional[str] = None,
) -> List[DataPoint]:
    """
    Convert a tabular export into :class:`DataPoint` objects.

    Rows with a missing latitude or longitude are skipped. Missing labels
    stay ``None`` so they fall into the ``unknown`` group.
    """
    if df.empty:
        return []

    missing = {lat_col, lng_col} - set(df.columns)
    if missing:
        raise ValueError(f"Missing required coordinate columns: {sorted(missing)}")

    frame = df.dropna(subset=[lat_col, lng_col])

    points: List[DataPoint] = []
    for row in frame.to_dict(orient="records"):
        label = row.get(label_col) if label_col else None
        if label is not None and pd.isna(label):
            label = None

        density = row.get(density_col, 1) if density_col else 1
        if density is None or pd.isna(density):
            density = 1

        points.append(
            DataPoint(
                coordinates=GeoPoint(float(row[lat_col]), float(row[lng_col])),
                label=str(label) if label is not None else None,
                density=int(density),
            )
        )
    return points
