"""CTA Bus Tracker repository adapter."""

import asyncio
import logging
from typing import Any

from cta_tracker.adapters.cta_api.constants import (
    BUS_MAX_ROUTES_PER_REQUEST,
    BUS_NO_DATA_MESSAGE,
    BUS_TRACKER_PROVIDER,
    BUS_VEHICLES_URL,
)
from cta_tracker.adapters.cta_api.vehicle_parser import as_list, parse_bus_vehicles
from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models.vehicle_position import VehiclePosition
from cta_tracker.domain.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


def chunk_routes(routes: list[str], size: int = BUS_MAX_ROUTES_PER_REQUEST) -> list[list[str]]:
    """Split routes into request-sized batches."""
    return [routes[i : i + size] for i in range(0, len(routes), size)]


def extract_vehicles(payload: Any) -> list[dict[str, Any]]:
    """Extract raw vehicles from a getvehicles payload.

    Routes without active vehicles are reported as "No data found" errors and
    yield no vehicles; any other error means the provider is unavailable.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("bustime-response"), dict):
        raise UpstreamUnavailable(BUS_TRACKER_PROVIDER, "malformed payload")

    body = payload["bustime-response"]
    vehicles = [v for v in as_list(body.get("vehicle")) if isinstance(v, dict)]
    errors = [e for e in as_list(body.get("error")) if isinstance(e, dict)]
    hard_errors = [e for e in errors if BUS_NO_DATA_MESSAGE not in str(e.get("msg", ""))]
    if hard_errors and not vehicles:
        messages = "; ".join(str(e.get("msg", "")) for e in hard_errors)
        logger.warning(f"Bus Tracker error: {messages}")
        raise UpstreamUnavailable(BUS_TRACKER_PROVIDER, "provider error")
    return vehicles


class CtaBusTrackerRepository(VehicleRepository):
    """Adapter for CTA Bus Tracker vehicle positions."""

    def __init__(self, http_client: UpstreamHttpClient, api_key: str | None) -> None:
        """Initialize with the shared HTTP client and the Bus Tracker key."""
        self._http = http_client
        self._api_key = api_key

    async def _fetch_vehicles(self, routes: list[str]) -> list[dict[str, Any]]:
        if not self._api_key:
            raise UpstreamUnavailable(BUS_TRACKER_PROVIDER, "no API key configured")
        params = {"key": self._api_key, "rt": ",".join(routes), "format": "json"}
        payload = await self._http.get_json(BUS_TRACKER_PROVIDER, BUS_VEHICLES_URL, params)
        return extract_vehicles(payload)

    async def get_raw_positions(self, route: str) -> list[dict[str, Any]]:
        """Get the raw vehicle objects for a single route."""
        return await self._fetch_vehicles([route])

    async def get_live_vehicles(self, routes: list[str]) -> list[VehiclePosition]:
        """Get live positions for the given routes.

        Routes are requested in batches of ten, concurrently; results keep the
        route order of the batches.
        """
        if not routes:
            return []
        batches = await asyncio.gather(
            *(self._fetch_vehicles(batch) for batch in chunk_routes(routes))
        )
        vehicles = parse_bus_vehicles([v for batch in batches for v in batch])
        logger.debug(f"Fetched {len(vehicles)} bus position(s) for {len(routes)} route(s)")
        return vehicles
