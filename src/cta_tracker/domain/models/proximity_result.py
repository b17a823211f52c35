"""Proximity result domain model."""

from dataclasses import dataclass, field

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.station_candidate import StationCandidate
from cta_tracker.domain.models.vehicle_position import VehiclePosition


@dataclass(frozen=True)
class ProximityCounts:
    """Sizes of the collections of a proximity result."""

    stations: int
    buses: int
    trains: int


@dataclass(frozen=True)
class ProximityResult:
    """Stations and vehicles near a reference coordinate."""

    center: Coordinate
    stations: list[StationCandidate] = field(default_factory=list)
    buses: list[VehiclePosition] = field(default_factory=list)
    trains: list[VehiclePosition] = field(default_factory=list)
    unavailable_sources: tuple[str, ...] = field(default_factory=tuple)

    @property
    def counts(self) -> ProximityCounts:
        """Counts derived from the collections."""
        return ProximityCounts(
            stations=len(self.stations),
            buses=len(self.buses),
            trains=len(self.trains),
        )
