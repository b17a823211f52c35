"""CTA Train Tracker repository adapter (positions and arrivals)."""

import logging
from typing import Any

from cta_tracker.adapters.cta_api.constants import (
    TRAIN_ARRIVALS_URL,
    TRAIN_POSITIONS_URL,
    TRAIN_TRACKER_PROVIDER,
)
from cta_tracker.adapters.cta_api.vehicle_parser import parse_train_positions
from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models.stop_table import is_parent_station_id
from cta_tracker.domain.models.vehicle_position import VehiclePosition
from cta_tracker.domain.ports.arrival_repository import ArrivalRepository
from cta_tracker.domain.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


def _check_error_code(payload: Any) -> dict[str, Any]:
    """Reject payloads that are not objects or carry a Train Tracker error code."""
    if not isinstance(payload, dict) or not isinstance(payload.get("ctatt"), dict):
        raise UpstreamUnavailable(TRAIN_TRACKER_PROVIDER, "malformed payload")
    ctatt = payload["ctatt"]
    error_code = str(ctatt.get("errCd", "0"))
    if error_code != "0":
        logger.warning(f"Train Tracker error {error_code}: {ctatt.get('errNm')}")
        raise UpstreamUnavailable(TRAIN_TRACKER_PROVIDER, f"error code {error_code}")
    return payload


class CtaTrainTrackerRepository(VehicleRepository, ArrivalRepository):
    """Adapter for CTA Train Tracker positions and arrivals."""

    def __init__(self, http_client: UpstreamHttpClient, api_key: str | None) -> None:
        """Initialize with the shared HTTP client and the Train Tracker key."""
        self._http = http_client
        self._api_key = api_key

    def _params(self, **params: Any) -> dict[str, Any]:
        if not self._api_key:
            raise UpstreamUnavailable(TRAIN_TRACKER_PROVIDER, "no API key configured")
        return {"key": self._api_key, "outputType": "JSON", **params}

    async def get_raw_positions(self, route: str) -> Any:
        """Get the ttpositions payload for one or more comma-separated routes."""
        return await self._http.get_json(
            TRAIN_TRACKER_PROVIDER, TRAIN_POSITIONS_URL, self._params(rt=route)
        )

    async def get_live_vehicles(self, routes: list[str]) -> list[VehiclePosition]:
        """Get live positions of all trains on the given routes."""
        if not routes:
            return []
        payload = _check_error_code(await self.get_raw_positions(",".join(routes)))
        vehicles = parse_train_positions(payload)
        logger.debug(f"Fetched {len(vehicles)} train position(s) for {len(routes)} route(s)")
        return vehicles

    async def get_arrivals(self, stop_id: int | str) -> dict[str, Any]:
        """Get the ttarrivals payload for a platform stop or a parent station.

        Parent station ids (40000-49999) are queried by ``mapid``, every other
        id by ``stpid``.
        """
        try:
            numeric_id = int(stop_id)
        except (TypeError, ValueError):
            numeric_id = None

        if numeric_id is not None and is_parent_station_id(numeric_id):
            params = self._params(mapid=numeric_id)
        else:
            params = self._params(stpid=stop_id)

        payload = await self._http.get_json(TRAIN_TRACKER_PROVIDER, TRAIN_ARRIVALS_URL, params)
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(TRAIN_TRACKER_PROVIDER, "malformed payload")
        return payload
