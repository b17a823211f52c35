"""Domain models for CTA tracking."""

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.eta_estimate import EtaEstimate
from cta_tracker.domain.models.geocoded_place import GeocodedPlace
from cta_tracker.domain.models.itinerary import Itinerary, ItineraryStep
from cta_tracker.domain.models.proximity_result import ProximityCounts, ProximityResult
from cta_tracker.domain.models.service_alert import (
    AlertFeed,
    AlertSeverity,
    ImpactedService,
    ServiceAlert,
)
from cta_tracker.domain.models.station_candidate import StationCandidate
from cta_tracker.domain.models.stop_arrival import StopArrival
from cta_tracker.domain.models.stop_table import StopTable
from cta_tracker.domain.models.transport_mode import TransportMode
from cta_tracker.domain.models.vehicle_position import VehiclePosition

__all__ = [
    "AlertFeed",
    "AlertSeverity",
    "Coordinate",
    "EtaEstimate",
    "GeocodedPlace",
    "ImpactedService",
    "Itinerary",
    "ItineraryStep",
    "ProximityCounts",
    "ProximityResult",
    "ServiceAlert",
    "StationCandidate",
    "StopArrival",
    "StopTable",
    "TransportMode",
    "VehiclePosition",
]
