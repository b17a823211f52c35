"""Constants for the Google Maps Platform web services."""

PLACES_PROVIDER = "Google Places"
DIRECTIONS_PROVIDER = "Google Directions"
GEOCODING_PROVIDER = "Google Geocoding"

PLACES_NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"
STATUS_NOT_FOUND = "NOT_FOUND"

PLACES_SOURCE_LABEL = "google_places"

# Directions vehicle types, grouped the way itinerary steps are labelled
BUS_VEHICLE_TYPES = frozenset({"BUS", "INTERCITY_BUS", "TROLLEYBUS", "SHARE_TAXI"})
TRAIN_VEHICLE_TYPES = frozenset(
    {
        "RAIL",
        "METRO_RAIL",
        "SUBWAY",
        "TRAM",
        "MONORAIL",
        "HEAVY_RAIL",
        "COMMUTER_TRAIN",
        "HIGH_SPEED_TRAIN",
        "LONG_DISTANCE_TRAIN",
    }
)
