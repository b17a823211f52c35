"""Collaborators required by the HTTP endpoints."""

from dataclasses import dataclass

from cta_tracker.adapters.config import AppConfig
from cta_tracker.domain.ports import (
    AlertRepository,
    ArrivalRepository,
    DirectionsRepository,
    EtaEstimator,
    GeocodingRepository,
    ProximityAggregator,
    StationRepository,
    StopArrivalService,
    VehicleRepository,
)


@dataclass(frozen=True)
class WebDependencies:
    """Repositories and services shared by all request handlers."""

    config: AppConfig
    station_repository: StationRepository
    bus_repository: VehicleRepository
    train_repository: VehicleRepository
    arrival_repository: ArrivalRepository
    alert_repository: AlertRepository
    directions_repository: DirectionsRepository
    geocoding_repository: GeocodingRepository
    aggregator: ProximityAggregator
    estimator: EtaEstimator
    stop_arrival_service: StopArrivalService
