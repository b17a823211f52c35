"""Ports (interfaces) for the ports-and-adapters architecture."""

from cta_tracker.domain.ports.alert_repository import AlertRepository
from cta_tracker.domain.ports.arrival_repository import ArrivalRepository
from cta_tracker.domain.ports.directions_repository import DirectionsRepository
from cta_tracker.domain.ports.eta_estimator import EtaEstimator
from cta_tracker.domain.ports.geocoding_repository import GeocodingRepository
from cta_tracker.domain.ports.proximity_aggregator import ProximityAggregator
from cta_tracker.domain.ports.station_repository import StationRepository
from cta_tracker.domain.ports.stop_arrival_service import StopArrivalService
from cta_tracker.domain.ports.vehicle_repository import VehicleRepository

__all__ = [
    "AlertRepository",
    "ArrivalRepository",
    "DirectionsRepository",
    "EtaEstimator",
    "GeocodingRepository",
    "ProximityAggregator",
    "StationRepository",
    "StopArrivalService",
    "VehicleRepository",
]
