"""Geocoding repository port."""

from typing import Protocol

from cta_tracker.domain.models.geocoded_place import GeocodedPlace


class GeocodingRepository(Protocol):
    """Port for resolving free-form addresses."""

    async def geocode(self, address: str) -> list[GeocodedPlace]:
        """Resolve an address to candidate places."""
        ...
