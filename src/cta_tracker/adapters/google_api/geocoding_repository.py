"""Google Geocoding repository adapter."""

from typing import Any

from cta_tracker.adapters.google_api.constants import GEOCODE_URL, GEOCODING_PROVIDER
from cta_tracker.adapters.google_api.status import results_or_raise
from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.geocoded_place import GeocodedPlace
from cta_tracker.domain.ports.geocoding_repository import GeocodingRepository


def parse_geocode_result(result: dict[str, Any]) -> GeocodedPlace:
    """Convert a geocoding result into a place."""
    location = (result.get("geometry") or {}).get("location") or {}
    return GeocodedPlace(
        address=str(result.get("formatted_address", "")),
        location=Coordinate.coerce(location.get("lat"), location.get("lng")),
        place_id=result.get("place_id"),
    )


class GoogleGeocodingRepository(GeocodingRepository):
    """Adapter for address lookups with the Geocoding API."""

    def __init__(self, http_client: UpstreamHttpClient, api_key: str | None) -> None:
        """Initialize with the shared HTTP client and the server key."""
        self._http = http_client
        self._api_key = api_key

    async def geocode(self, address: str) -> list[GeocodedPlace]:
        """Resolve an address to candidate places, best match first."""
        if not self._api_key:
            raise UpstreamUnavailable(GEOCODING_PROVIDER, "no API key configured")
        params = {"address": address, "key": self._api_key}
        payload = await self._http.get_json(GEOCODING_PROVIDER, GEOCODE_URL, params)
        return [
            parse_geocode_result(result)
            for result in results_or_raise(GEOCODING_PROVIDER, payload)
            if isinstance(result, dict)
        ]
