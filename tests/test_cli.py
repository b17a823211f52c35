"""Tests for the command line client."""

import json
import math
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cta_tracker import cli
from cta_tracker.application.services import EtaEstimator, StopArrivalService
from cta_tracker.domain.errors import ValidationError
from cta_tracker.domain.models import (
    AlertFeed,
    AlertSeverity,
    Coordinate,
    EtaEstimate,
    GeocodedPlace,
    ImpactedService,
    Itinerary,
    ItineraryStep,
    ProximityResult,
    ServiceAlert,
    StationCandidate,
    StopArrival,
    StopTable,
    TransportMode,
    VehiclePosition,
)

CENTER = Coordinate(latitude=41.8781, longitude=-87.6298)


def make_deps(result: ProximityResult | None = None) -> MagicMock:
    deps = MagicMock()
    stop_table = StopTable()
    deps.estimator = EtaEstimator()
    deps.aggregator.aggregate = AsyncMock(return_value=result or ProximityResult(center=CENTER))
    deps.stop_arrival_service = StopArrivalService(MagicMock(), stop_table)
    deps.geocoding_repository.geocode = AsyncMock(return_value=[])
    deps.alert_repository.get_alerts = AsyncMock(return_value=AlertFeed(timestamp="t"))
    deps.directions_repository.get_transit_routes = AsyncMock(return_value=[])
    return deps


def sample_result() -> ProximityResult:
    return ProximityResult(
        center=CENTER,
        stations=[
            StationCandidate(
                name="Clark/Lake",
                location=CENTER,
                address="100 W Lake St",
                source_label="google_places",
            )
        ],
        buses=[
            VehiclePosition(
                id="8123",
                mode=TransportMode.BUS,
                route="22",
                location=Coordinate(latitude=math.nan, longitude=-87.6),
                heading=None,
                destination="Howard",
                delayed=False,
            )
        ],
        unavailable_sources=("trains",),
    )


class TestFormatting:
    """Tests for plain-text rendering."""

    def test_format_nearby_lists_entities_with_etas(self) -> None:
        """Given a result, when formatting, then counts, entities and '?' for unknown ETAs appear."""
        result = sample_result()

        text = cli.format_nearby(
            result, [EtaEstimate(minutes=0)], [EtaEstimate.unknown()], []
        )

        assert "1 station(s), 1 bus(es), 0 train(s)" in text
        assert "Unavailable: trains" in text
        assert "Clark/Lake (100 W Lake St) - 0 min" in text
        assert "#22 to Howard [8123] - ? min" in text

    def test_format_arrivals_shows_due_and_delays(self) -> None:
        """Given arrivals at 0 and 4 minutes, when formatting, then 'Due' and minutes are shown."""
        arrivals = [
            StopArrival(
                route="Brn",
                destination="Kimball",
                station="Clark/Lake",
                arrival_time=None,
                minutes=0,
                is_approaching=True,
            ),
            StopArrival(
                route="G",
                destination="Harlem/Lake",
                station="Clark/Lake",
                arrival_time=None,
                minutes=4,
                is_delayed=True,
            ),
        ]

        text = cli.format_arrivals("Clark/Lake", arrivals)

        assert "Brn to Kimball: Due" in text
        assert "G to Harlem/Lake: 4 min (delayed)" in text

    def test_format_arrivals_empty(self) -> None:
        """Given no arrivals, when formatting, then a friendly message is shown."""
        assert cli.format_arrivals("Roosevelt", []) == "No upcoming arrivals at Roosevelt."

    def test_format_alerts_lists_affected_services(self) -> None:
        """Given an alert, when formatting, then its headline and services are shown."""
        feed = AlertFeed(
            timestamp="t",
            alerts=[
                ServiceAlert(
                    id="1",
                    headline="Red Line delays",
                    short_description=None,
                    full_description=None,
                    severity=AlertSeverity(score="60", color="#ff0000", type="major"),
                    impact="Significant Delays",
                    event_start=None,
                    event_end=None,
                    open_ended=False,
                    major_alert=True,
                    url=None,
                    impacted_services=[
                        ImpactedService(
                            type="Rail Line",
                            name="Red Line",
                            id="Red",
                            background_color="#c60c30",
                            text_color="#ffffff",
                            url="",
                        )
                    ],
                )
            ],
        )

        text = cli.format_alerts(feed)

        assert "[major] Red Line delays" in text
        assert "Affects: Red Line" in text

    def test_format_routes_shows_transit_and_walking_steps(self) -> None:
        """Given an itinerary, when formatting, then each step is listed."""
        itinerary = Itinerary(
            duration="18 mins",
            distance="2.3 mi",
            arrival="2:19 PM",
            departure="2:01 PM",
            start_address="a",
            end_address="b",
            steps=[
                ItineraryStep(
                    type="walking", instructions="Walk to stop", distance="1", duration="4 mins"
                ),
                ItineraryStep(
                    type="bus",
                    instructions="Bus",
                    distance="2",
                    duration="14 mins",
                    route_name="22",
                    departure_stop="Clark & Lake",
                    arrival_stop="Clark & Diversey",
                    num_stops=12,
                ),
            ],
        )

        text = cli.format_routes([itinerary])

        assert "Route 1: 18 mins (2.3 mi), 2:01 PM -> 2:19 PM" in text
        assert "walking: Walk to stop (4 mins)" in text
        assert "bus: 22 from Clark & Lake to Clark & Diversey (12 stops)" in text

    def test_format_routes_empty(self) -> None:
        """Given no itineraries, when formatting, then a message is shown."""
        assert cli.format_routes([]) == "No transit routes found."


class TestResolveCenter:
    """Tests for reference point resolution."""

    @pytest.mark.asyncio
    async def test_when_lat_lng_given_then_used(self) -> None:
        """Given lat and lng, when resolving, then they are used directly."""
        deps = make_deps()

        center = await cli.resolve_center(deps, 41.8781, -87.6298, None)

        assert center == CENTER
        deps.geocoding_repository.geocode.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_when_address_given_then_geocoded(self) -> None:
        """Given an address, when resolving, then the first geocoded location is used."""
        deps = make_deps()
        deps.geocoding_repository.geocode.return_value = [
            GeocodedPlace(address="Union Station", location=CENTER)
        ]

        center = await cli.resolve_center(deps, None, None, "Union Station")

        assert center == CENTER

    @pytest.mark.asyncio
    async def test_when_address_unknown_then_validation_error(self) -> None:
        """Given an address without matches, when resolving, then ValidationError is raised."""
        with pytest.raises(ValidationError, match="Address not found"):
            await cli.resolve_center(make_deps(), None, None, "Nowhere")

    @pytest.mark.asyncio
    async def test_when_nothing_given_then_validation_error(self) -> None:
        """Given neither coordinates nor address, when resolving, then ValidationError is raised."""
        with pytest.raises(ValidationError):
            await cli.resolve_center(make_deps(), 41.8, None, None)


class TestRunCommand:
    """Tests for command dispatch."""

    @pytest.mark.asyncio
    async def test_nearby_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given --json, when running nearby, then the proximity JSON is printed."""
        deps = make_deps(ProximityResult(center=CENTER))
        args = cli.build_parser().parse_args(
            ["nearby", "--lat", "41.8781", "--lng", "-87.6298", "--json"]
        )

        exit_code = await cli.run_command(args, deps)

        assert exit_code == 0
        output: dict[str, Any] = json.loads(capsys.readouterr().out)
        assert output["counts"] == {"stations": 0, "buses": 0, "trains": 0}
        deps.aggregator.aggregate.assert_awaited_once_with(CENTER)

    @pytest.mark.asyncio
    async def test_arrivals_unknown_station_exit_code(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given an unknown station, when running arrivals, then exit code 1 and known names are shown."""
        args = cli.build_parser().parse_args(["arrivals", "Howard"])

        exit_code = await cli.run_command(args, make_deps())

        assert exit_code == 1
        assert "Clark/Lake" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_alerts_route_filter_forwarded(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given --route, when running alerts, then the filter is passed on."""
        deps = make_deps()
        args = cli.build_parser().parse_args(["alerts", "--route", "red"])

        await cli.run_command(args, deps)

        deps.alert_repository.get_alerts.assert_awaited_once_with(route_id="red")
        assert "No alerts." in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_routes_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given origin and destination, when running routes, then directions are requested."""
        deps = make_deps()
        args = cli.build_parser().parse_args(["routes", "Union Station", "Navy Pier"])

        await cli.run_command(args, deps)

        deps.directions_repository.get_transit_routes.assert_awaited_once_with(
            "Union Station", "Navy Pier"
        )
        assert "No transit routes found." in capsys.readouterr().out


class TestMain:
    """Tests for the CLI entry point."""

    @pytest.mark.asyncio
    async def test_when_no_command_then_exits_with_help(self) -> None:
        """Given no subcommand, when running, then exit code 1 is returned."""
        with pytest.raises(SystemExit) as exc_info:
            await cli.main([])

        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_when_command_fails_validation_then_error_printed(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given nearby without a location, when running, then an error is printed and exit is 1."""
        with (
            patch("cta_tracker.cli.build_dependencies", return_value=make_deps()),
            pytest.raises(SystemExit) as exc_info,
        ):
            await cli.main(["nearby"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
