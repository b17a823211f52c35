"""Query parameter validation."""

import math

from starlette.requests import Request

from cta_tracker.domain.errors import ValidationError
from cta_tracker.domain.models.coordinate import Coordinate


def require_param(request: Request, name: str, message: str | None = None) -> str:
    """Return a non-blank query parameter or raise ValidationError."""
    value = request.query_params.get(name, "").strip()
    if not value:
        raise ValidationError(message or f"Missing required parameter '{name}'")
    return value


def require_coordinate(request: Request) -> Coordinate:
    """Read ``lat``/``lng`` query parameters as a finite coordinate."""
    lat = request.query_params.get("lat", "").strip()
    lng = request.query_params.get("lng", "").strip()
    if not lat or not lng:
        raise ValidationError("Missing lat or lng")
    try:
        latitude = float(lat)
        longitude = float(lng)
    except ValueError as e:
        raise ValidationError("lat and lng must be numbers") from e
    if not math.isfinite(latitude) or not math.isfinite(longitude):
        raise ValidationError("lat and lng must be finite numbers")
    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        raise ValidationError("lat or lng out of range")
    return Coordinate(latitude=latitude, longitude=longitude)
