"""Parsers turning CTA tracker payloads into vehicle positions."""

import logging
from typing import Any

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.transport_mode import TransportMode
from cta_tracker.domain.models.vehicle_position import VehiclePosition

logger = logging.getLogger(__name__)


def as_list(value: Any) -> list[Any]:
    """Coerce an XML-derived field that may hold one object or many into a list."""
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _parse_heading(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_flag(value: Any) -> bool:
    """Parse CTA booleans, which arrive as true/false or "1"/"0" or "true"/"false"."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true")


def parse_train_positions(payload: dict[str, Any]) -> list[VehiclePosition]:
    """Parse a ttpositions payload.

    Shape: ``{"ctatt": {"route": [{"@name": "red", "train": [...]}]}}`` where
    ``route`` and ``train`` may each be a single object.
    """
    vehicles: list[VehiclePosition] = []
    ctatt = payload.get("ctatt") or {}
    for route in as_list(ctatt.get("route")):
        if not isinstance(route, dict):
            continue
        route_name = str(route.get("@name", ""))
        for train in as_list(route.get("train")):
            if not isinstance(train, dict):
                continue
            vehicles.append(
                VehiclePosition(
                    id=str(train.get("rn", "")),
                    mode=TransportMode.TRAIN,
                    route=route_name,
                    location=Coordinate.coerce(train.get("lat"), train.get("lon")),
                    heading=_parse_heading(train.get("heading")),
                    destination=str(train.get("destNm", "")),
                    delayed=_parse_flag(train.get("isDly")),
                )
            )
    return vehicles


def parse_bus_vehicles(vehicles: list[Any]) -> list[VehiclePosition]:
    """Parse the ``vehicle`` list of a getvehicles payload."""
    parsed: list[VehiclePosition] = []
    for vehicle in vehicles:
        if not isinstance(vehicle, dict):
            continue
        parsed.append(
            VehiclePosition(
                id=str(vehicle.get("vid", "")),
                mode=TransportMode.BUS,
                route=str(vehicle.get("rt", "")),
                location=Coordinate.coerce(vehicle.get("lat"), vehicle.get("lon")),
                heading=_parse_heading(vehicle.get("hdg")),
                destination=str(vehicle.get("des", "")),
                delayed=_parse_flag(vehicle.get("dly", False)),
            )
        )
    return parsed
