"""Google Places nearby-search station repository adapter."""

import logging
from typing import Any

from cta_tracker.adapters.google_api.constants import (
    PLACES_NEARBY_URL,
    PLACES_PROVIDER,
    PLACES_SOURCE_LABEL,
)
from cta_tracker.adapters.google_api.status import results_or_raise
from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.station_candidate import StationCandidate
from cta_tracker.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)


def parse_place(place: dict[str, Any]) -> StationCandidate:
    """Convert a nearby-search result into a station candidate."""
    location = (place.get("geometry") or {}).get("location") or {}
    return StationCandidate(
        name=str(place.get("name", "")),
        location=Coordinate.coerce(location.get("lat"), location.get("lng")),
        address=str(place.get("vicinity") or place.get("formatted_address") or ""),
        source_label=PLACES_SOURCE_LABEL,
        types=tuple(str(t) for t in place.get("types") or [] if t),
    )


class GooglePlacesStationRepository(StationRepository):
    """Adapter searching transit stations with the Places nearby search."""

    def __init__(
        self,
        http_client: UpstreamHttpClient,
        api_key: str | None,
        place_type: str | None = "transit_station",
    ) -> None:
        """Initialize with the shared HTTP client, the server key and a place type filter."""
        self._http = http_client
        self._api_key = api_key
        self._place_type = place_type

    async def find_nearby_stations(
        self,
        center: Coordinate,
        radius_meters: int,
        keyword: str | None = None,
    ) -> list[StationCandidate]:
        """Find stations around ``center``, in the provider's order."""
        if radius_meters <= 0:
            raise ValueError("radius_meters must be positive")
        if not self._api_key:
            raise UpstreamUnavailable(PLACES_PROVIDER, "no API key configured")

        params: dict[str, Any] = {
            "location": f"{center.latitude},{center.longitude}",
            "radius": radius_meters,
            "key": self._api_key,
        }
        if self._place_type:
            params["type"] = self._place_type
        if keyword:
            params["keyword"] = keyword

        payload = await self._http.get_json(PLACES_PROVIDER, PLACES_NEARBY_URL, params)
        stations = [
            parse_place(place)
            for place in results_or_raise(PLACES_PROVIDER, payload)
            if isinstance(place, dict)
        ]
        logger.debug(f"Found {len(stations)} station(s) within {radius_meters}m")
        return stations
