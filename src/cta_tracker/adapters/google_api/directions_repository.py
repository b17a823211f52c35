"""Google Directions repository adapter (transit mode)."""

import logging
import re
from typing import Any

from cta_tracker.adapters.google_api.constants import (
    BUS_VEHICLE_TYPES,
    DIRECTIONS_PROVIDER,
    DIRECTIONS_URL,
    STATUS_NOT_FOUND,
    STATUS_ZERO_RESULTS,
    TRAIN_VEHICLE_TYPES,
)
from cta_tracker.adapters.google_api.status import results_or_raise
from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models.itinerary import (
    STEP_BUS,
    STEP_OTHER,
    STEP_TRAIN,
    STEP_WALKING,
    Itinerary,
    ItineraryStep,
)
from cta_tracker.domain.ports.directions_repository import DirectionsRepository

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")


def _text(value: Any) -> str | None:
    """Read the ``text`` member of Google's ``{text, value}`` objects."""
    if isinstance(value, dict):
        return value.get("text")
    return None


def strip_html(value: str | None) -> str | None:
    """Remove the markup Google embeds in ``html_instructions``."""
    if value is None:
        return None
    text = _TAG_RE.sub(" ", value).replace("&nbsp;", " ")
    return " ".join(text.split())


def classify_vehicle(vehicle_type: str | None) -> str:
    """Map a Directions vehicle type onto an itinerary step type."""
    if vehicle_type in BUS_VEHICLE_TYPES:
        return STEP_BUS
    if vehicle_type in TRAIN_VEHICLE_TYPES:
        return STEP_TRAIN
    return STEP_OTHER


def parse_step(step: dict[str, Any]) -> ItineraryStep:
    """Reshape one leg step according to its travel mode."""
    travel_mode = step.get("travel_mode")
    common = {
        "instructions": strip_html(step.get("html_instructions")),
        "distance": _text(step.get("distance")),
        "duration": _text(step.get("duration")),
        "travel_mode": travel_mode,
    }

    if travel_mode == "WALKING":
        return ItineraryStep(type=STEP_WALKING, **common)

    if travel_mode == "TRANSIT":
        details = step.get("transit_details") or {}
        line = details.get("line") or {}
        vehicle_type = (line.get("vehicle") or {}).get("type")
        step_type = classify_vehicle(vehicle_type)
        if step_type != STEP_OTHER:
            return ItineraryStep(
                type=step_type,
                route_name=line.get("short_name") or line.get("name"),
                route_long_name=line.get("name"),
                headsign=details.get("headsign"),
                departure_stop=(details.get("departure_stop") or {}).get("name"),
                arrival_stop=(details.get("arrival_stop") or {}).get("name"),
                departure_time=_text(details.get("departure_time")),
                arrival_time=_text(details.get("arrival_time")),
                num_stops=details.get("num_stops"),
                line_color=line.get("color"),
                **common,
            )

    return ItineraryStep(type=STEP_OTHER, **common)


def parse_route(route: dict[str, Any]) -> Itinerary:
    """Reshape a Directions route, using its first leg."""
    legs = route.get("legs") or [{}]
    leg = legs[0] if isinstance(legs[0], dict) else {}
    return Itinerary(
        duration=_text(leg.get("duration")),
        distance=_text(leg.get("distance")),
        arrival=_text(leg.get("arrival_time")),
        departure=_text(leg.get("departure_time")),
        start_address=leg.get("start_address"),
        end_address=leg.get("end_address"),
        steps=[parse_step(s) for s in leg.get("steps", []) if isinstance(s, dict)],
    )


class GoogleDirectionsRepository(DirectionsRepository):
    """Adapter for transit itineraries from the Directions API."""

    def __init__(self, http_client: UpstreamHttpClient, api_key: str | None) -> None:
        """Initialize with the shared HTTP client and the server key."""
        self._http = http_client
        self._api_key = api_key

    async def get_transit_routes(self, origin: str, destination: str) -> list[Itinerary]:
        """Get transit itinerary alternatives between two free-form places."""
        if not self._api_key:
            raise UpstreamUnavailable(DIRECTIONS_PROVIDER, "no API key configured")

        params = {
            "origin": origin,
            "destination": destination,
            "mode": "transit",
            "alternatives": "true",
            "key": self._api_key,
        }
        payload = await self._http.get_json(DIRECTIONS_PROVIDER, DIRECTIONS_URL, params)
        routes = results_or_raise(
            DIRECTIONS_PROVIDER,
            payload,
            key="routes",
            empty_statuses=frozenset({STATUS_ZERO_RESULTS, STATUS_NOT_FOUND}),
        )
        itineraries = [parse_route(r) for r in routes if isinstance(r, dict)]
        logger.debug(f"Found {len(itineraries)} transit route(s)")
        return itineraries
