"""JSON shapes returned by the HTTP endpoints."""

from typing import Any

from cta_tracker.domain.models import (
    AlertFeed,
    EtaEstimate,
    GeocodedPlace,
    Itinerary,
    ItineraryStep,
    ProximityResult,
    ServiceAlert,
    StationCandidate,
    StopArrival,
    StopTable,
    VehiclePosition,
)
from cta_tracker.domain.models.itinerary import STEP_BUS, STEP_OTHER, STEP_TRAIN, STEP_WALKING
from cta_tracker.domain.ports.eta_estimator import EtaEstimator


def serialize_station(station: StationCandidate) -> dict[str, Any]:
    """Shape used by ``/nearby`` results."""
    return {
        "name": station.name,
        "location": station.location.to_dict(),
        "types": list(station.types),
        "address": station.address,
    }


def serialize_vehicle(vehicle: VehiclePosition, eta: EtaEstimate) -> dict[str, Any]:
    """Vehicle entry of a ``/tracknearby`` response."""
    return {
        "id": vehicle.id,
        "type": vehicle.mode.value,
        "route": vehicle.route,
        "lat": vehicle.location.latitude,
        "lng": vehicle.location.longitude,
        "heading": vehicle.heading,
        "destination": vehicle.destination,
        "delayed": vehicle.delayed,
        "etaMinutes": eta.minutes,
    }


def serialize_proximity_result(
    result: ProximityResult, estimator: EtaEstimator, stop_table: StopTable
) -> dict[str, Any]:
    """Serialize a proximity result, computing a fresh ETA for every entity."""
    center = result.center
    counts = result.counts
    return {
        "center": center.to_dict(),
        "stations": [
            {
                **serialize_station(station),
                "source": station.source_label,
                "type": estimator.station_mode(station).value,
                "stopId": stop_table.get_stop_id(station.name),
                "etaMinutes": estimator.for_station(center, station).minutes,
            }
            for station in result.stations
        ],
        "buses": [
            serialize_vehicle(bus, estimator.for_vehicle(center, bus)) for bus in result.buses
        ],
        "trains": [
            serialize_vehicle(train, estimator.for_vehicle(center, train))
            for train in result.trains
        ],
        "counts": {
            "stations": counts.stations,
            "buses": counts.buses,
            "trains": counts.trains,
        },
        "unavailable": list(result.unavailable_sources),
    }


def serialize_alert(alert: ServiceAlert) -> dict[str, Any]:
    """Flat alert shape consumed by the display layer."""
    return {
        "id": alert.id,
        "headline": alert.headline,
        "shortDescription": alert.short_description,
        "fullDescription": alert.full_description,
        "severity": {
            "score": alert.severity.score,
            "color": alert.severity.color,
            "type": alert.severity.type,
        },
        "impact": alert.impact,
        "eventStart": alert.event_start,
        "eventEnd": alert.event_end,
        "openEnded": alert.open_ended,
        "majorAlert": alert.major_alert,
        "url": alert.url,
        "impactedServices": [
            {
                "type": service.type,
                "name": service.name,
                "id": service.id,
                "colors": {
                    "background": service.background_color,
                    "text": service.text_color,
                },
                "url": service.url,
            }
            for service in alert.impacted_services
        ],
    }


def serialize_alert_feed(feed: AlertFeed) -> dict[str, Any]:
    """Serialize ``/alerts``."""
    return {
        "timestamp": feed.timestamp,
        "alerts": [serialize_alert(alert) for alert in feed.alerts],
    }


def serialize_step(step: ItineraryStep) -> dict[str, Any]:
    """Serialize a step with the fields relevant to its type."""
    base: dict[str, Any] = {"type": step.type}
    if step.type in (STEP_BUS, STEP_TRAIN):
        base.update(
            {
                "routeName": step.route_name,
                "routeLongName": step.route_long_name,
                "headsign": step.headsign,
                "departureStop": step.departure_stop,
                "arrivalStop": step.arrival_stop,
                "departureTime": step.departure_time,
                "arrivalTime": step.arrival_time,
                "numStops": step.num_stops,
                "lineColor": step.line_color,
            }
        )
    elif step.type == STEP_OTHER:
        base["travelMode"] = step.travel_mode
    elif step.type != STEP_WALKING:
        raise ValueError(f"Unknown step type: {step.type}")
    base.update(
        {
            "instructions": step.instructions,
            "distance": step.distance,
            "duration": step.duration,
        }
    )
    return base


def serialize_itinerary(itinerary: Itinerary) -> dict[str, Any]:
    """Serialize one ``/routes`` entry."""
    return {
        "duration": itinerary.duration,
        "distance": itinerary.distance,
        "arrival": itinerary.arrival,
        "departure": itinerary.departure,
        "startAddress": itinerary.start_address,
        "endAddress": itinerary.end_address,
        "steps": [serialize_step(step) for step in itinerary.steps],
    }


def serialize_arrival(arrival: StopArrival) -> dict[str, Any]:
    """Serialize a per-stop arrival."""
    return {
        "route": arrival.route,
        "destination": arrival.destination,
        "station": arrival.station,
        "arrivalTime": arrival.arrival_time.isoformat() if arrival.arrival_time else None,
        "minutes": arrival.minutes,
        "isApproaching": arrival.is_approaching,
        "isDelayed": arrival.is_delayed,
    }


def serialize_place(place: GeocodedPlace) -> dict[str, Any]:
    """Serialize a geocoding result."""
    return {
        "address": place.address,
        "location": place.location.to_dict(),
        "placeId": place.place_id,
    }
