"""Coarse average-speed ETA estimation."""

import math

from cta_tracker.domain.geo import haversine_km
from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.eta_estimate import EtaEstimate
from cta_tracker.domain.models.station_candidate import StationCandidate
from cta_tracker.domain.models.transport_mode import TransportMode
from cta_tracker.domain.models.vehicle_position import VehiclePosition

ASSUMED_SPEED_KMH: dict[TransportMode, float] = {
    TransportMode.BUS: 20.0,
    TransportMode.TRAIN: 25.0,
}

RAIL_PLACE_TYPES = frozenset({"subway_station", "train_station", "light_rail_station"})


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def estimate_eta(
    center: Coordinate | None, target: Coordinate | None, mode: TransportMode
) -> EtaEstimate:
    """Estimate whole minutes between ``center`` and ``target`` at the mode's cruising speed.

    Returns an unknown estimate when either side is missing or not finite.
    """
    if center is None or target is None or not center.is_finite or not target.is_finite:
        return EtaEstimate.unknown()
    distance_km = haversine_km(center, target)
    return EtaEstimate(minutes=round_half_up(distance_km / ASSUMED_SPEED_KMH[mode] * 60))


class EtaEstimator:
    """Attaches ETA estimates to stations and vehicles.

    Vehicles use the speed of their own mode. Every station is estimated at
    the train speed, whatever kind of stop it is.
    """

    def station_mode(self, station: StationCandidate) -> TransportMode:
        """Classify a station from its place types; pure bus stations are bus stops."""
        types = set(station.types)
        if "bus_station" in types and not types & RAIL_PLACE_TYPES:
            return TransportMode.BUS
        return TransportMode.TRAIN

    def for_station(self, center: Coordinate | None, station: StationCandidate) -> EtaEstimate:
        """Estimate minutes between ``center`` and a station."""
        return estimate_eta(center, station.location, TransportMode.TRAIN)

    def for_vehicle(self, center: Coordinate | None, vehicle: VehiclePosition) -> EtaEstimate:
        """Estimate minutes between ``center`` and a vehicle."""
        return estimate_eta(center, vehicle.location, vehicle.mode)
