"""Composition root shared by the server and the CLI."""

from zoneinfo import ZoneInfo

from aiohttp import ClientSession
from pydantic import SecretStr

from cta_tracker.adapters.config import AppConfig, StopTableLoader
from cta_tracker.adapters.cta_api import (
    CtaAlertsRepository,
    CtaBusTrackerRepository,
    CtaTrainTrackerRepository,
)
from cta_tracker.adapters.google_api import (
    GoogleDirectionsRepository,
    GoogleGeocodingRepository,
    GooglePlacesStationRepository,
)
from cta_tracker.adapters.http import UpstreamHttpClient
from cta_tracker.adapters.web import WebDependencies
from cta_tracker.application.services import (
    AggregatorSettings,
    EtaEstimator,
    ProximityAggregator,
    StopArrivalService,
)


def _secret(value: SecretStr | None) -> str | None:
    return value.get_secret_value() if value is not None else None


def aggregator_settings(config: AppConfig) -> AggregatorSettings:
    """Map configuration onto aggregation settings."""
    return AggregatorSettings(
        search_radius_meters=config.nearby_search_radius_meters,
        keyword=config.nearby_keyword,
        bus_radius_km=config.bus_radius_km,
        train_radius_km=config.train_radius_km,
        bus_routes=config.bus_routes,
        train_routes=config.train_routes,
    )


def build_dependencies(config: AppConfig, session: ClientSession) -> WebDependencies:
    """Wire repositories and services around one shared HTTP session.

    Args:
        config: Application configuration.
        session: aiohttp session reused by every upstream call.

    Returns:
        Fully wired dependencies for the web adapter and the CLI.
    """
    http_client = UpstreamHttpClient(session, timeout_seconds=config.upstream_timeout_seconds)
    google_key = _secret(config.google_maps_api_key_server)

    station_repo = GooglePlacesStationRepository(
        http_client, google_key, place_type=config.nearby_place_type
    )
    bus_repo = CtaBusTrackerRepository(http_client, _secret(config.cta_bus_key))
    train_repo = CtaTrainTrackerRepository(http_client, _secret(config.cta_train_key))

    stop_table = StopTableLoader.load(config)
    estimator = EtaEstimator()
    aggregator = ProximityAggregator(
        station_repo, bus_repo, train_repo, settings=aggregator_settings(config)
    )
    stop_arrival_service = StopArrivalService(
        train_repo,
        stop_table,
        max_arrivals=config.max_stop_arrivals,
        tz=ZoneInfo(config.timezone),
    )

    return WebDependencies(
        config=config,
        station_repository=station_repo,
        bus_repository=bus_repo,
        train_repository=train_repo,
        arrival_repository=train_repo,
        alert_repository=CtaAlertsRepository(http_client),
        directions_repository=GoogleDirectionsRepository(http_client, google_key),
        geocoding_repository=GoogleGeocodingRepository(http_client, google_key),
        aggregator=aggregator,
        estimator=estimator,
        stop_arrival_service=stop_arrival_service,
    )
