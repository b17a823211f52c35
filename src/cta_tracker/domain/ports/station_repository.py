"""Station repository port."""

from typing import Protocol

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.station_candidate import StationCandidate


class StationRepository(Protocol):
    """Port for searching transit stations around a coordinate."""

    async def find_nearby_stations(
        self,
        center: Coordinate,
        radius_meters: int,
        keyword: str | None = None,
    ) -> list[StationCandidate]:
        """Find stations within ``radius_meters`` of ``center``.

        Raises UpstreamUnavailable when the provider fails.
        """
        ...
