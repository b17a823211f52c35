"""ETA estimator port."""

from typing import Protocol

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.eta_estimate import EtaEstimate
from cta_tracker.domain.models.station_candidate import StationCandidate
from cta_tracker.domain.models.transport_mode import TransportMode
from cta_tracker.domain.models.vehicle_position import VehiclePosition


class EtaEstimator(Protocol):
    """Port for coarse arrival estimates of stations and vehicles."""

    def station_mode(self, station: StationCandidate) -> TransportMode:
        """Classify a station as a train or bus stop from its place types."""
        ...

    def for_station(self, center: Coordinate | None, station: StationCandidate) -> EtaEstimate:
        """Estimate minutes between ``center`` and a station."""
        ...

    def for_vehicle(self, center: Coordinate | None, vehicle: VehiclePosition) -> EtaEstimate:
        """Estimate minutes between ``center`` and a vehicle."""
        ...
