"""Nearby transit aggregation."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.geo import haversine_km
from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.proximity_result import ProximityResult
from cta_tracker.domain.models.station_candidate import StationCandidate
from cta_tracker.domain.models.vehicle_position import VehiclePosition
from cta_tracker.domain.ports.station_repository import StationRepository
from cta_tracker.domain.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_STATIONS = "stations"
SOURCE_BUSES = "buses"
SOURCE_TRAINS = "trains"


@dataclass(frozen=True)
class AggregatorSettings:
    """Search and filter parameters for the nearby aggregation."""

    search_radius_meters: int = 800
    keyword: str | None = None
    bus_radius_km: float = 1.2
    train_radius_km: float = 1.5
    bus_routes: list[str] = field(default_factory=list)
    train_routes: list[str] = field(default_factory=list)


def within_radius(center: Coordinate, location: Coordinate, radius_km: float) -> bool:
    """Whether ``location`` is at most ``radius_km`` from ``center``.

    The boundary is inclusive. Non-finite locations never match.
    """
    if not center.is_finite or not location.is_finite:
        return False
    return haversine_km(center, location) <= radius_km


def filter_vehicles(
    center: Coordinate, vehicles: Sequence[VehiclePosition], radius_km: float
) -> list[VehiclePosition]:
    """Keep vehicles within the radius, preserving upstream order."""
    return [v for v in vehicles if within_radius(center, v.location, radius_km)]


def build_proximity_result(
    center: Coordinate,
    stations: Sequence[StationCandidate],
    buses: Sequence[VehiclePosition],
    trains: Sequence[VehiclePosition],
    bus_radius_km: float,
    train_radius_km: float,
    unavailable_sources: Sequence[str] = (),
) -> ProximityResult:
    """Filter raw collections into a proximity result.

    Stations are bounded by the upstream search radius and only lose entries
    without a finite location; vehicles are filtered by great-circle distance.
    """
    return ProximityResult(
        center=center,
        stations=[s for s in stations if s.location.is_finite],
        buses=filter_vehicles(center, buses, bus_radius_km),
        trains=filter_vehicles(center, trains, train_radius_km),
        unavailable_sources=tuple(unavailable_sources),
    )


class ProximityAggregator:
    """Merges station search results with live bus and train feeds."""

    def __init__(
        self,
        station_repository: StationRepository,
        bus_repository: VehicleRepository,
        train_repository: VehicleRepository,
        settings: AggregatorSettings | None = None,
    ) -> None:
        """Initialize with one repository per source.

        Args:
            station_repository: Places search used for nearby stations.
            bus_repository: Live bus positions.
            train_repository: Live train positions.
            settings: Search radius, filter radii and tracked routes.
        """
        self._station_repository = station_repository
        self._bus_repository = bus_repository
        self._train_repository = train_repository
        self.settings = settings or AggregatorSettings()

    async def aggregate(self, center: Coordinate) -> ProximityResult:
        """Fetch all three sources concurrently and filter them around ``center``.

        A failing source contributes an empty collection and is reported in
        ``unavailable_sources``; the other sources are returned as usual.
        """
        settings = self.settings
        stations, buses, trains = await asyncio.gather(
            self._fetch_or_empty(
                SOURCE_STATIONS,
                self._station_repository.find_nearby_stations(
                    center, settings.search_radius_meters, settings.keyword
                ),
            ),
            self._fetch_or_empty(
                SOURCE_BUSES, self._bus_repository.get_live_vehicles(settings.bus_routes)
            ),
            self._fetch_or_empty(
                SOURCE_TRAINS, self._train_repository.get_live_vehicles(settings.train_routes)
            ),
        )

        unavailable = [
            name
            for name, items in (
                (SOURCE_STATIONS, stations),
                (SOURCE_BUSES, buses),
                (SOURCE_TRAINS, trains),
            )
            if items is None
        ]
        result = build_proximity_result(
            center,
            stations or [],
            buses or [],
            trains or [],
            bus_radius_km=settings.bus_radius_km,
            train_radius_km=settings.train_radius_km,
            unavailable_sources=unavailable,
        )
        counts = result.counts
        logger.debug(
            f"Nearby {center.latitude:.5f},{center.longitude:.5f}: "
            f"{counts.stations} stations, {counts.buses} buses, {counts.trains} trains"
            + (f" (unavailable: {', '.join(unavailable)})" if unavailable else "")
        )
        return result

    async def _fetch_or_empty(self, source: str, fetch: Awaitable[list[T]]) -> list[T] | None:
        """Await a source, returning None when its provider is unavailable."""
        try:
            return await fetch
        except UpstreamUnavailable as e:
            logger.warning(f"Nearby source '{source}' unavailable, continuing without it: {e}")
            return None
