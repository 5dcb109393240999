"""Great-circle distance between coordinate pairs."""

from __future__ import annotations

import math

from shared.domain.value_objects import GeoPoint

# Mean Earth radius
EARTH_RADIUS_KM = 6371.0


def haversine_km(origin: GeoPoint, target: GeoPoint) -> float:
    """Distance in kilometres along the Earth's surface (haversine formula)."""
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(target.longitude - origin.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def latitude_band(origin: GeoPoint, radius_km: float) -> tuple[float, float]:
    """Latitude range that contains every point within ``radius_km`` of origin.

    Used as a cheap database prefilter before exact distances are computed.
    One degree of latitude is never shorter than 110.5 km.
    """
    delta = radius_km / 110.5
    return max(origin.latitude - delta, -90.0), min(origin.latitude + delta, 90.0)
