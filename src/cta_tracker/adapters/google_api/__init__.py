"""Google Maps Platform adapters."""

from cta_tracker.adapters.google_api.directions_repository import GoogleDirectionsRepository
from cta_tracker.adapters.google_api.geocoding_repository import GoogleGeocodingRepository
from cta_tracker.adapters.google_api.places_repository import GooglePlacesStationRepository

__all__ = [
    "GoogleDirectionsRepository",
    "GoogleGeocodingRepository",
    "GooglePlacesStationRepository",
]
