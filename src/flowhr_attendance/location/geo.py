from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_METERS = 6371000


@dataclass(frozen=True)
class GeoPosition:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None

    def to_dict(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude, "accuracy": self.accuracy}


def haversine_distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two WGS84 points."""

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
