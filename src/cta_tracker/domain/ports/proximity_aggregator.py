"""Proximity aggregator port."""

from typing import Protocol

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.proximity_result import ProximityResult


class ProximityAggregator(Protocol):
    """Port for nearby stations and vehicles around a reference coordinate."""

    async def aggregate(self, center: Coordinate) -> ProximityResult:
        """Fetch stations, buses and trains and keep those near ``center``.

        Args:
            center: Reference coordinate (user location or map click).

        Returns:
            Filtered result; failed sources are empty and listed as unavailable.
        """
        ...
