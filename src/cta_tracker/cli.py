"""Command line client for nearby transit, arrivals, alerts and routes."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import aiohttp

from cta_tracker.adapters.config import AppConfig
from cta_tracker.adapters.web import WebDependencies
from cta_tracker.adapters.web.serializers import (
    serialize_alert_feed,
    serialize_arrival,
    serialize_itinerary,
    serialize_proximity_result,
)
from cta_tracker.application.services import NearbyRefresher, NearbySnapshot
from cta_tracker.domain.errors import UpstreamUnavailable, ValidationError
from cta_tracker.domain.models import (
    AlertFeed,
    Coordinate,
    EtaEstimate,
    Itinerary,
    ProximityResult,
    StopArrival,
)
from cta_tracker.wiring import build_dependencies

logger = logging.getLogger(__name__)


def _eta_label(eta: EtaEstimate) -> str:
    return f"{eta.display()} min"


def format_nearby(
    result: ProximityResult,
    station_etas: list[EtaEstimate],
    bus_etas: list[EtaEstimate],
    train_etas: list[EtaEstimate],
) -> str:
    """Render a proximity result with ETAs as plain text."""
    counts = result.counts
    lines = [
        f"Near {result.center.latitude:.5f}, {result.center.longitude:.5f}: "
        f"{counts.stations} station(s), {counts.buses} bus(es), {counts.trains} train(s)"
    ]
    if result.unavailable_sources:
        lines.append(f"Unavailable: {', '.join(result.unavailable_sources)}")

    lines.append("\nStations:")
    for station, eta in zip(result.stations, station_etas, strict=True):
        lines.append(f"  {station.name} ({station.address or 'no address'}) - {_eta_label(eta)}")

    lines.append("\nBuses:")
    for bus, eta in zip(result.buses, bus_etas, strict=True):
        lines.append(f"  #{bus.route} to {bus.destination or '?'} [{bus.id}] - {_eta_label(eta)}")

    lines.append("\nTrains:")
    for train, eta in zip(result.trains, train_etas, strict=True):
        lines.append(
            f"  {train.route} line to {train.destination or '?'} [{train.id}] - {_eta_label(eta)}"
        )
    return "\n".join(lines)


def format_arrivals(station: str, arrivals: list[StopArrival]) -> str:
    """Render the next arrivals of a station."""
    if not arrivals:
        return f"No upcoming arrivals at {station}."
    lines = [f"Next arrivals at {station}:"]
    for arrival in arrivals:
        if arrival.minutes is None:
            minutes = "?"
        elif arrival.minutes == 0:
            minutes = "Due"
        else:
            minutes = f"{arrival.minutes} min"
        flags = " (delayed)" if arrival.is_delayed else ""
        lines.append(f"  {arrival.route} to {arrival.destination}: {minutes}{flags}")
    return "\n".join(lines)


def format_alerts(feed: AlertFeed) -> str:
    """Render alert headlines with severity and impacted services."""
    if not feed.alerts:
        return "No alerts."
    lines = []
    for alert in feed.alerts:
        services = ", ".join(s.name for s in alert.impacted_services if s.name)
        lines.append(f"[{alert.severity.type or alert.impact or 'Alert'}] {alert.headline}")
        if services:
            lines.append(f"    Affects: {services}")
    return "\n".join(lines)


def format_routes(itineraries: list[Itinerary]) -> str:
    """Render itinerary alternatives step by step."""
    if not itineraries:
        return "No transit routes found."
    lines = []
    for index, itinerary in enumerate(itineraries, start=1):
        lines.append(
            f"Route {index}: {itinerary.duration or '?'} ({itinerary.distance or '?'}), "
            f"{itinerary.departure or '?'} -> {itinerary.arrival or '?'}"
        )
        for step in itinerary.steps:
            if step.route_name:
                lines.append(
                    f"  {step.type}: {step.route_name} from {step.departure_stop} "
                    f"to {step.arrival_stop} ({step.num_stops} stops)"
                )
            else:
                lines.append(f"  {step.type}: {step.instructions} ({step.duration or '?'})")
    return "\n".join(lines)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def resolve_center(
    deps: WebDependencies,
    lat: float | None,
    lng: float | None,
    address: str | None,
) -> Coordinate:
    """Resolve the reference coordinate from explicit values or an address."""
    if address:
        places = await deps.geocoding_repository.geocode(address)
        located = [p for p in places if p.location.is_finite]
        if not located:
            raise ValidationError(f"Address not found: {address}")
        return located[0].location
    if lat is None or lng is None:
        raise ValidationError("Either --lat and --lng or --address is required")
    center = Coordinate(latitude=lat, longitude=lng)
    if not center.is_finite:
        raise ValidationError("lat and lng must be finite numbers")
    return center


async def show_nearby(deps: WebDependencies, center: Coordinate, format_json: bool) -> None:
    """Aggregate once and print the result."""
    result = await deps.aggregator.aggregate(center)
    if result.unavailable_sources:
        logger.warning(f"Sources unavailable: {', '.join(result.unavailable_sources)}")
    if format_json:
        stop_table = deps.stop_arrival_service.stop_table
        _print_json(serialize_proximity_result(result, deps.estimator, stop_table))
        return
    estimator = deps.estimator
    print(
        format_nearby(
            result,
            [estimator.for_station(center, s) for s in result.stations],
            [estimator.for_vehicle(center, v) for v in result.buses],
            [estimator.for_vehicle(center, v) for v in result.trains],
        )
    )


async def watch_nearby(deps: WebDependencies, center: Coordinate, format_json: bool) -> None:
    """Refresh the nearby view on the configured interval until interrupted."""
    stop_table = deps.stop_arrival_service.stop_table

    def on_update(snapshot: NearbySnapshot) -> None:
        if format_json:
            _print_json(serialize_proximity_result(snapshot.result, deps.estimator, stop_table))
        else:
            print(f"\n--- refreshed {snapshot.refreshed_at:%H:%M:%S} ---")
            print(
                format_nearby(
                    snapshot.result,
                    snapshot.station_etas,
                    snapshot.bus_etas,
                    snapshot.train_etas,
                )
            )

    refresher = NearbyRefresher(
        deps.aggregator,
        deps.estimator,
        center_provider=lambda: center,
        on_update=on_update,
        interval_seconds=deps.config.refresh_interval_seconds,
    )
    await refresher.start()
    try:
        await refresher.wait()
    finally:
        await refresher.stop()


async def show_arrivals(deps: WebDependencies, station: str, format_json: bool) -> int:
    """Print the next arrivals of a station; returns the exit code."""
    arrivals = await deps.stop_arrival_service.next_arrivals(station)
    if arrivals is None:
        known = ", ".join(deps.stop_arrival_service.stop_table.stops)
        print(f"Unknown station '{station}'. Known stations: {known}", file=sys.stderr)
        return 1
    if format_json:
        _print_json({"station": station, "arrivals": [serialize_arrival(a) for a in arrivals]})
    else:
        print(format_arrivals(station, arrivals))
    return 0


async def show_alerts(deps: WebDependencies, route: str | None, format_json: bool) -> None:
    """Print normalized alerts, optionally for a single route."""
    feed = await deps.alert_repository.get_alerts(route_id=route)
    if format_json:
        _print_json(serialize_alert_feed(feed))
    else:
        print(format_alerts(feed))


async def show_routes(
    deps: WebDependencies, origin: str, destination: str, format_json: bool
) -> None:
    """Print transit itineraries between two places."""
    itineraries = await deps.directions_repository.get_transit_routes(origin, destination)
    if format_json:
        _print_json({"routes": [serialize_itinerary(i) for i in itineraries]})
    else:
        print(format_routes(itineraries))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="CTA transit tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Nearby stations, buses and trains with ETAs
  cta-tracker nearby --lat 41.8853 --lng -87.6317

  # Same, refreshed every 30 seconds
  cta-tracker nearby --address "Union Station, Chicago" --watch

  # Next arrivals at a station of the stop table
  cta-tracker arrivals "Clark/Lake"

  # Alerts for the Red Line
  cta-tracker alerts --route red

  # Transit directions
  cta-tracker routes "Union Station, Chicago" "Navy Pier, Chicago"
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    nearby_parser = subparsers.add_parser("nearby", help="Show nearby stations and vehicles")
    nearby_parser.add_argument("--lat", type=float, help="Latitude of the reference point")
    nearby_parser.add_argument("--lng", type=float, help="Longitude of the reference point")
    nearby_parser.add_argument("--address", help="Address to geocode as reference point")
    nearby_parser.add_argument("--watch", action="store_true", help="Refresh periodically")
    nearby_parser.add_argument("--json", action="store_true", help="Output as JSON")

    arrivals_parser = subparsers.add_parser("arrivals", help="Show next arrivals at a station")
    arrivals_parser.add_argument("station", help="Station name (e.g., Clark/Lake)")
    arrivals_parser.add_argument("--json", action="store_true", help="Output as JSON")

    alerts_parser = subparsers.add_parser("alerts", help="Show CTA service alerts")
    alerts_parser.add_argument("--route", help="Route id filter (e.g., red, 22)")
    alerts_parser.add_argument("--json", action="store_true", help="Output as JSON")

    routes_parser = subparsers.add_parser("routes", help="Show transit directions")
    routes_parser.add_argument("origin", help="Origin address or place")
    routes_parser.add_argument("destination", help="Destination address or place")
    routes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def run_command(args: argparse.Namespace, deps: WebDependencies) -> int:
    """Dispatch a parsed command; returns the exit code."""
    if args.command == "nearby":
        center = await resolve_center(deps, args.lat, args.lng, args.address)
        if args.watch:
            await watch_nearby(deps, center, args.json)
        else:
            await show_nearby(deps, center, args.json)
    elif args.command == "arrivals":
        return await show_arrivals(deps, args.station, args.json)
    elif args.command == "alerts":
        await show_alerts(deps, args.route, args.json)
    elif args.command == "routes":
        await show_routes(deps, args.origin, args.destination, args.json)
    return 0


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    try:
        config = AppConfig()
        async with aiohttp.ClientSession() as session:
            deps = build_dependencies(config, session)
            exit_code = await run_command(args, deps)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except (ValidationError, UpstreamUnavailable) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
