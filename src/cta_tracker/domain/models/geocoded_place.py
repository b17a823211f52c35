"""Geocoded place domain model."""

from dataclasses import dataclass

from cta_tracker.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class GeocodedPlace:
    """An address resolved to a coordinate."""

    address: str
    location: Coordinate
    place_id: str | None = None
