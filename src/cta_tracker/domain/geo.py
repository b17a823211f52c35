"""Great-circle distance."""

import math

from cta_tracker.domain.models.coordinate import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Return the haversine distance between two coordinates in kilometers.

    Non-finite inputs propagate as NaN, so callers must check
    ``Coordinate.is_finite`` before comparing against a radius.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    if h > 1.0:
        h = 1.0
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
