from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_float, require_in_range


@dataclass(frozen=True)
class GeoPoint:
    """A WGS-84 coordinate in signed decimal degrees."""

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude, longitude) -> "GeoPoint":
        """Build a point from untrusted input (JSON, form fields, CLI args)."""
        lat = require_in_range(require_float(latitude, "latitude"), "latitude", -90.0, 90.0)
        lon = require_in_range(require_float(longitude, "longitude"), "longitude", -180.0, 180.0)
        return cls(latitude=lat, longitude=lon)
