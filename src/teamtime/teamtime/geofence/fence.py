"""Great-circle distance and the circular office geofence."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..common.validators import require_positive
from ..core.constants import EARTH_RADIUS_KM
from .model import GeoPoint


def distance_meters(p1: GeoPoint, p2: GeoPoint) -> float:
    """Haversine distance between two points, in meters."""
    lat1 = math.radians(p1.latitude)
    lat2 = math.radians(p2.latitude)
    dlat = math.radians(p2.latitude - p1.latitude)
    dlon = math.radians(p2.longitude - p1.longitude)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push a slightly past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c * 1000


def is_within(point: GeoPoint, center: GeoPoint, radius_m: float) -> bool:
    return distance_meters(point, center) <= radius_m


@dataclass(frozen=True)
class GeoFence:
    center: GeoPoint
    radius_m: float

    def __post_init__(self):
        require_positive(self.radius_m, "Geofence radius")

    @classmethod
    def from_config(cls, config: dict) -> "GeoFence":
        center = GeoPoint.parse(config["latitude"], config["longitude"])
        return cls(center=center, radius_m=float(config["radius_m"]))

    def distance_to(self, point: GeoPoint) -> float:
        return distance_meters(point, self.center)

    def is_within(self, point: GeoPoint) -> bool:
        return self.distance_to(point) <= self.radius_m

    def describe(self) -> dict:
        return {
            "latitude": self.center.latitude,
            "longitude": self.center.longitude,
            "radius_m": self.radius_m,
        }
