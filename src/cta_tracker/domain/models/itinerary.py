"""Itinerary domain models."""

from dataclasses import dataclass, field

STEP_WALKING = "walking"
STEP_BUS = "bus"
STEP_TRAIN = "train"
STEP_OTHER = "other"


@dataclass(frozen=True)
class ItineraryStep:
    """One step of a transit itinerary.

    Transit-only fields stay ``None`` for walking and other steps.
    """

    type: str
    instructions: str | None
    distance: str | None
    duration: str | None
    travel_mode: str | None = None
    route_name: str | None = None
    route_long_name: str | None = None
    headsign: str | None = None
    departure_stop: str | None = None
    arrival_stop: str | None = None
    departure_time: str | None = None
    arrival_time: str | None = None
    num_stops: int | None = None
    line_color: str | None = None


@dataclass(frozen=True)
class Itinerary:
    """A single route alternative between two places."""

    duration: str | None
    distance: str | None
    arrival: str | None
    departure: str | None
    start_address: str | None
    end_address: str | None
    steps: list[ItineraryStep] = field(default_factory=list)
