"""Directions repository port."""

from typing import Protocol

from cta_tracker.domain.models.itinerary import Itinerary


class DirectionsRepository(Protocol):
    """Port for transit itineraries between two places."""

    async def get_transit_routes(self, origin: str, destination: str) -> list[Itinerary]:
        """Get itinerary alternatives; an empty list when none exist."""
        ...
