"""Tests for the Google Places, Directions and Geocoding adapters."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cta_tracker.adapters.google_api import (
    GoogleDirectionsRepository,
    GoogleGeocodingRepository,
    GooglePlacesStationRepository,
)
from cta_tracker.adapters.google_api.constants import PLACES_NEARBY_URL
from cta_tracker.adapters.google_api.directions_repository import (
    classify_vehicle,
    parse_step,
    strip_html,
)
from cta_tracker.adapters.google_api.status import results_or_raise
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models import Coordinate

CENTER = Coordinate(latitude=41.8781, longitude=-87.6298)


def make_http(payload: Any) -> MagicMock:
    http = MagicMock()
    http.get_json = AsyncMock(return_value=payload)
    return http


WALK_STEP = {
    "travel_mode": "WALKING",
    "html_instructions": "Walk to <b>Clark/Lake</b>",
    "distance": {"text": "0.2 mi", "value": 320},
    "duration": {"text": "4 mins", "value": 240},
}

BUS_STEP = {
    "travel_mode": "TRANSIT",
    "html_instructions": "Bus towards Howard",
    "distance": {"text": "2.1 mi", "value": 3400},
    "duration": {"text": "14 mins", "value": 840},
    "transit_details": {
        "line": {
            "short_name": "22",
            "name": "Clark",
            "color": "#565a5c",
            "vehicle": {"type": "BUS", "name": "Bus"},
        },
        "headsign": "Howard",
        "departure_stop": {"name": "Clark & Lake"},
        "arrival_stop": {"name": "Clark & Diversey"},
        "departure_time": {"text": "2:05 PM"},
        "arrival_time": {"text": "2:19 PM"},
        "num_stops": 12,
    },
}


class TestResultsOrRaise:
    """Tests for Google status handling."""

    def test_when_ok_then_results_returned(self) -> None:
        """Given status OK, when reading results, then the list is returned."""
        assert results_or_raise("p", {"status": "OK", "results": [1, 2]}) == [1, 2]

    def test_when_zero_results_then_empty(self) -> None:
        """Given ZERO_RESULTS, when reading results, then an empty list is returned."""
        assert results_or_raise("p", {"status": "ZERO_RESULTS"}) == []

    @pytest.mark.parametrize("status", ["REQUEST_DENIED", "OVER_QUERY_LIMIT", "INVALID_REQUEST"])
    def test_when_error_status_then_unavailable(self, status: str) -> None:
        """Given an error status, when reading results, then UpstreamUnavailable is raised."""
        payload = {"status": status, "error_message": "The provided API key is invalid."}

        with pytest.raises(UpstreamUnavailable) as exc_info:
            results_or_raise("Google Places", payload)

        assert "API key is invalid" not in str(exc_info.value)

    def test_when_results_missing_then_unavailable(self) -> None:
        """Given OK without results, when reading, then the payload is treated as malformed."""
        with pytest.raises(UpstreamUnavailable, match="malformed payload"):
            results_or_raise("p", {"status": "OK"})


class TestGooglePlacesStationRepository:
    """Tests for nearby station search."""

    @pytest.mark.asyncio
    async def test_when_places_found_then_stations_in_provider_order(self) -> None:
        """Given two places, when searching, then both stations keep the provider order."""
        http = make_http(
            {
                "status": "OK",
                "results": [
                    {
                        "name": "Clark/Lake",
                        "geometry": {"location": {"lat": 41.8857, "lng": -87.6309}},
                        "vicinity": "100 W Lake St, Chicago",
                        "types": ["subway_station", "transit_station"],
                    },
                    {
                        "name": "Lake & Wells",
                        "geometry": {"location": {"lat": 41.8858, "lng": -87.6339}},
                        "formatted_address": "Lake St & Wells St",
                    },
                ],
            }
        )
        repository = GooglePlacesStationRepository(http, "server-key")

        stations = await repository.find_nearby_stations(CENTER, 800, keyword="cta")

        assert [s.name for s in stations] == ["Clark/Lake", "Lake & Wells"]
        assert stations[0].address == "100 W Lake St, Chicago"
        assert stations[0].types == ("subway_station", "transit_station")
        assert stations[0].source_label == "google_places"
        assert stations[1].address == "Lake St & Wells St"
        call = http.get_json.await_args
        assert call.args[1] == PLACES_NEARBY_URL
        assert call.args[2] == {
            "location": "41.8781,-87.6298",
            "radius": 800,
            "key": "server-key",
            "type": "transit_station",
            "keyword": "cta",
        }

    @pytest.mark.asyncio
    async def test_when_types_null_then_empty_types(self) -> None:
        """Given a place whose types is null, when searching, then the station has no types."""
        http = make_http(
            {
                "status": "OK",
                "results": [
                    {
                        "name": "Lake & Wells",
                        "geometry": {"location": {"lat": 41.8858, "lng": -87.6339}},
                        "types": None,
                    }
                ],
            }
        )
        repository = GooglePlacesStationRepository(http, "k")

        stations = await repository.find_nearby_stations(CENTER, 800)

        assert [s.types for s in stations] == [()]

    @pytest.mark.asyncio
    async def test_when_zero_results_then_empty(self) -> None:
        """Given ZERO_RESULTS, when searching, then no stations are returned."""
        repository = GooglePlacesStationRepository(make_http({"status": "ZERO_RESULTS"}), "k")

        assert await repository.find_nearby_stations(CENTER, 800) == []

    @pytest.mark.asyncio
    async def test_when_radius_not_positive_then_rejected(self) -> None:
        """Given a zero radius, when searching, then ValueError is raised."""
        repository = GooglePlacesStationRepository(make_http({}), "k")

        with pytest.raises(ValueError, match="radius_meters"):
            await repository.find_nearby_stations(CENTER, 0)


class TestDirectionsParsing:
    """Tests for itinerary step reshaping."""

    def test_strip_html_removes_tags_and_nbsp(self) -> None:
        """Given HTML instructions, when stripping, then plain text remains."""
        assert strip_html("Walk&nbsp;to <b>Clark/Lake</b><div>Destination</div>") == (
            "Walk to Clark/Lake Destination"
        )

    @pytest.mark.parametrize(
        ("vehicle_type", "expected"),
        [("BUS", "bus"), ("SUBWAY", "train"), ("HEAVY_RAIL", "train"), ("FERRY", "other")],
    )
    def test_vehicle_types_classified(self, vehicle_type: str, expected: str) -> None:
        """Given a vehicle type, when classifying, then it maps to a step type."""
        assert classify_vehicle(vehicle_type) == expected

    def test_when_walking_step_then_no_transit_fields(self) -> None:
        """Given a walking step, when parsing, then only the common fields are set."""
        step = parse_step(WALK_STEP)

        assert step.type == "walking"
        assert step.instructions == "Walk to Clark/Lake"
        assert step.distance == "0.2 mi"
        assert step.duration == "4 mins"
        assert step.route_name is None

    def test_when_bus_step_then_transit_fields_set(self) -> None:
        """Given a bus step, when parsing, then line and stop details are set."""
        step = parse_step(BUS_STEP)

        assert step.type == "bus"
        assert step.route_name == "22"
        assert step.route_long_name == "Clark"
        assert step.headsign == "Howard"
        assert step.departure_stop == "Clark & Lake"
        assert step.arrival_stop == "Clark & Diversey"
        assert step.departure_time == "2:05 PM"
        assert step.num_stops == 12
        assert step.line_color == "#565a5c"

    def test_when_ferry_step_then_other_with_travel_mode(self) -> None:
        """Given a transit step on a ferry, when parsing, then it is 'other' and keeps the mode."""
        raw = {**BUS_STEP, "transit_details": {"line": {"vehicle": {"type": "FERRY"}}}}

        step = parse_step(raw)

        assert step.type == "other"
        assert step.travel_mode == "TRANSIT"


class TestGoogleDirectionsRepository:
    """Tests for transit directions."""

    @pytest.mark.asyncio
    async def test_when_route_found_then_itinerary_with_steps(self) -> None:
        """Given a route with a walk and a bus, when fetching, then both steps are returned."""
        http = make_http(
            {
                "status": "OK",
                "routes": [
                    {
                        "legs": [
                            {
                                "duration": {"text": "18 mins"},
                                "distance": {"text": "2.3 mi"},
                                "arrival_time": {"text": "2:19 PM"},
                                "departure_time": {"text": "2:01 PM"},
                                "start_address": "Union Station, Chicago",
                                "end_address": "Lincoln Park, Chicago",
                                "steps": [WALK_STEP, BUS_STEP],
                            }
                        ]
                    }
                ],
            }
        )

        itineraries = await GoogleDirectionsRepository(http, "k").get_transit_routes("a", "b")

        assert len(itineraries) == 1
        itinerary = itineraries[0]
        assert itinerary.duration == "18 mins"
        assert itinerary.start_address == "Union Station, Chicago"
        assert [s.type for s in itinerary.steps] == ["walking", "bus"]
        params = http.get_json.await_args.args[2]
        assert params["mode"] == "transit"
        assert params["origin"] == "a"
        assert params["destination"] == "b"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["ZERO_RESULTS", "NOT_FOUND"])
    async def test_when_no_route_then_empty(self, status: str) -> None:
        """Given ZERO_RESULTS or NOT_FOUND, when fetching, then no itineraries are returned."""
        repository = GoogleDirectionsRepository(make_http({"status": status}), "k")

        assert await repository.get_transit_routes("a", "b") == []

    @pytest.mark.asyncio
    async def test_when_key_missing_then_unavailable(self) -> None:
        """Given no server key, when fetching, then UpstreamUnavailable is raised."""
        with pytest.raises(UpstreamUnavailable):
            await GoogleDirectionsRepository(make_http({}), None).get_transit_routes("a", "b")


class TestGoogleGeocodingRepository:
    """Tests for address lookup."""

    @pytest.mark.asyncio
    async def test_when_address_found_then_place_returned(self) -> None:
        """Given a geocoding hit, when resolving, then address, location and id are mapped."""
        http = make_http(
            {
                "status": "OK",
                "results": [
                    {
                        "formatted_address": "225 S Canal St, Chicago, IL 60606, USA",
                        "geometry": {"location": {"lat": 41.8787, "lng": -87.6403}},
                        "place_id": "ChIJ-union",
                    }
                ],
            }
        )

        places = await GoogleGeocodingRepository(http, "k").geocode("Union Station, Chicago")

        assert places[0].address == "225 S Canal St, Chicago, IL 60606, USA"
        assert places[0].location == Coordinate(latitude=41.8787, longitude=-87.6403)
        assert places[0].place_id == "ChIJ-union"
