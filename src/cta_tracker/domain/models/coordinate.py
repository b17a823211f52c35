"""Coordinate domain model."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair."""

    latitude: float
    longitude: float

    @property
    def is_finite(self) -> bool:
        """Whether both components are finite numbers."""
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    @classmethod
    def coerce(cls, latitude: Any, longitude: Any) -> "Coordinate":
        """Build a coordinate from loosely typed upstream values.

        Values that cannot be parsed become NaN, never 0.0.
        """
        return cls(latitude=_to_float(latitude), longitude=_to_float(longitude))

    def to_dict(self) -> dict[str, float]:
        """Return the ``{lat, lng}`` shape used by map clients."""
        return {"lat": self.latitude, "lng": self.longitude}


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan
