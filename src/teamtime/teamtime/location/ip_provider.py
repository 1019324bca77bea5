from __future__ import annotations

import geocoder

from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.exceptions import LocationUnavailableError, ValidationError
from ..geofence.model import GeoPoint


class IpLocationProvider:
    """Coarse fix from the public IP address."""

    def __init__(self, *, timeout: float = DEFAULT_LOCATION_TIMEOUT_SECONDS):
        self._timeout = float(timeout)

    def current_fix(self) -> GeoPoint:
        g = geocoder.ip("me", timeout=self._timeout)
        if not g.ok or not g.latlng:
            raise LocationUnavailableError(f"IP geolocation returned no fix (status={g.status})")
        lat, lng = g.latlng
        try:
            return GeoPoint.parse(lat, lng)
        except ValidationError as e:
            raise LocationUnavailableError(f"IP geolocation returned an invalid fix: {e}") from e
