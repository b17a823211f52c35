"""Vehicle repository port."""

from typing import Any, Protocol

from cta_tracker.domain.models.vehicle_position import VehiclePosition


class VehicleRepository(Protocol):
    """Port for live vehicle positions of one transport mode."""

    async def get_live_vehicles(self, routes: list[str]) -> list[VehiclePosition]:
        """Get live positions for the given routes, in upstream order.

        Raises UpstreamUnavailable when the provider fails.
        """
        ...

    async def get_raw_positions(self, route: str) -> Any:
        """Get the provider payload for a single route without reshaping."""
        ...
