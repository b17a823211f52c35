"""Domain layer - core models, ports and errors."""

from cta_tracker.domain.errors import UpstreamUnavailable, ValidationError
from cta_tracker.domain.models import (
    Coordinate,
    EtaEstimate,
    ProximityResult,
    StationCandidate,
    TransportMode,
    VehiclePosition,
)
from cta_tracker.domain.ports import StationRepository, VehicleRepository

__all__ = [
    "Coordinate",
    "EtaEstimate",
    "ProximityResult",
    "StationCandidate",
    "StationRepository",
    "TransportMode",
    "UpstreamUnavailable",
    "ValidationError",
    "VehiclePosition",
    "VehicleRepository",
]
