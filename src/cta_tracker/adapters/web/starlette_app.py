"""Starlette web adapter exposing the transit endpoints."""

from __future__ import annotations

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from cta_tracker.domain.errors import UpstreamUnavailable, ValidationError

from .dependencies import WebDependencies
from .rate_limit_middleware import RateLimitMiddleware
from .request_params import require_coordinate, require_param
from .serializers import (
    serialize_alert_feed,
    serialize_arrival,
    serialize_itinerary,
    serialize_place,
    serialize_proximity_result,
    serialize_station,
)

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> JSONResponse:
    """JSON error body shared by every endpoint."""
    return JSONResponse({"error": message}, status_code=status_code)


def upstream_error(what: str, error: UpstreamUnavailable) -> JSONResponse:
    """Log the provider failure and answer with a generic 500."""
    logger.error(f"Error fetching {what}: {error}")
    return error_response(f"Failed to fetch {what}", 500)


async def _handle_validation_error(_request: Request, exc: Exception) -> Response:
    return error_response(str(exc), 400)


async def _handle_unexpected_error(request: Request, exc: Exception) -> Response:
    logger.error(f"Unhandled error for {request.url.path}: {exc}", exc_info=exc)
    return error_response("Internal server error", 500)


class StarletteWebAdapter:
    """Starlette-based HTTP adapter for the transit proxy endpoints."""

    def __init__(self, dependencies: WebDependencies) -> None:
        """Initialize the web adapter.

        Args:
            dependencies: Repositories, services and configuration used by the handlers.
        """
        self.deps = dependencies
        self.config = dependencies.config
        self._server: Any | None = None

    def build_app(self) -> Starlette:
        """Create the ASGI application with routes, middleware and error handlers."""
        routes = [
            Route("/", self.index, methods=["GET"]),
            Route("/healthz", self.healthz, methods=["GET"]),
            Route("/google-key", self.google_key, methods=["GET"]),
            Route("/trains/{route}", self.trains, methods=["GET"]),
            Route("/buses/{route}", self.buses, methods=["GET"]),
            Route("/alerts", self.alerts, methods=["GET"]),
            Route("/nearby", self.nearby, methods=["GET"]),
            Route("/tracknearby", self.track_nearby, methods=["GET"]),
            Route("/routes", self.routes, methods=["GET"]),
            Route("/cta-arrivals", self.cta_arrivals, methods=["GET"]),
            Route("/stop-arrivals", self.stop_arrivals, methods=["GET"]),
            Route("/geocode", self.geocode, methods=["GET"]),
        ]
        middleware = [
            Middleware(
                CORSMiddleware,
                allow_origins=self.config.cors_origins,
                allow_methods=["GET"],
            ),
            Middleware(
                RateLimitMiddleware,
                requests_per_minute=self.config.rate_limit_per_minute,
            ),
        ]
        return Starlette(
            routes=routes,
            middleware=middleware,
            exception_handlers={
                ValidationError: _handle_validation_error,
                Exception: _handle_unexpected_error,
            },
        )

    async def index(self, _request: Request) -> Response:
        """Liveness banner."""
        return PlainTextResponse("CTA Tracker API is running...")

    async def healthz(self, _request: Request) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return PlainTextResponse("Ok")

    async def google_key(self, _request: Request) -> Response:
        """Return the browser-restricted Maps key (development mode only)."""
        if self.config.is_production:
            return error_response("Not available", 404)
        key = self.config.google_maps_api_key_browser
        if not key:
            return error_response("No browser key configured", 500)
        return JSONResponse({"key": key})

    async def trains(self, request: Request) -> Response:
        """Pass through live train positions for a route."""
        route = request.path_params["route"]
        try:
            payload = await self.deps.train_repository.get_raw_positions(route)
        except UpstreamUnavailable as e:
            return upstream_error("train data", e)
        return JSONResponse(payload)

    async def buses(self, request: Request) -> Response:
        """Return live bus vehicles for a route."""
        route = request.path_params["route"].strip()
        if not route:
            raise ValidationError("Bus route is required")
        try:
            vehicles = await self.deps.bus_repository.get_raw_positions(route)
        except UpstreamUnavailable as e:
            return upstream_error("bus info", e)
        return JSONResponse({"route": route, "vehicles": vehicles})

    async def alerts(self, request: Request) -> Response:
        """Return normalized CTA service alerts."""
        query = request.query_params
        try:
            feed = await self.deps.alert_repository.get_alerts(
                route_id=query.get("routeid"),
                active_only=query.get("activeonly"),
                planned=query.get("planned"),
                accessibility=query.get("accessibility"),
            )
        except UpstreamUnavailable as e:
            return upstream_error("CTA alerts", e)
        return JSONResponse(serialize_alert_feed(feed))

    async def nearby(self, request: Request) -> Response:
        """Search transit stations around a coordinate."""
        center = require_coordinate(request)
        try:
            stations = await self.deps.station_repository.find_nearby_stations(
                center, self.config.nearby_search_radius_meters, self.config.nearby_keyword
            )
        except UpstreamUnavailable as e:
            return upstream_error("nearby places", e)
        results = [serialize_station(s) for s in stations if s.location.is_finite]
        return JSONResponse({"count": len(results), "results": results})

    async def track_nearby(self, request: Request) -> Response:
        """Aggregate nearby stations, buses and trains with ETAs."""
        center = require_coordinate(request)
        result = await self.deps.aggregator.aggregate(center)
        return JSONResponse(
            serialize_proximity_result(
                result, self.deps.estimator, self.deps.stop_arrival_service.stop_table
            )
        )

    async def routes(self, request: Request) -> Response:
        """Return transit itineraries between two places."""
        origin = require_param(request, "from", "Missing origin or destination")
        destination = require_param(request, "to", "Missing origin or destination")
        try:
            itineraries = await self.deps.directions_repository.get_transit_routes(
                origin, destination
            )
        except UpstreamUnavailable as e:
            return upstream_error("routes", e)
        return JSONResponse({"routes": [serialize_itinerary(i) for i in itineraries]})

    async def cta_arrivals(self, request: Request) -> Response:
        """Pass through Train Tracker arrivals for a stop id."""
        stop_id = require_param(request, "stpid")
        try:
            payload = await self.deps.arrival_repository.get_arrivals(stop_id)
        except UpstreamUnavailable as e:
            return upstream_error("CTA arrivals", e)
        return JSONResponse(payload)

    async def stop_arrivals(self, request: Request) -> Response:
        """Return the next arrivals for a station of the stop table."""
        station = require_param(request, "station")
        service = self.deps.stop_arrival_service
        try:
            arrivals = await service.next_arrivals(station)
        except UpstreamUnavailable as e:
            return upstream_error("CTA arrivals", e)
        if arrivals is None:
            return error_response(f"No arrival data for station '{station}'", 404)
        return JSONResponse(
            {
                "station": station,
                "stopId": service.stop_table.get_stop_id(station),
                "arrivals": [serialize_arrival(a) for a in arrivals],
            }
        )

    async def geocode(self, request: Request) -> Response:
        """Resolve an address to coordinates."""
        address = require_param(request, "address")
        try:
            places = await self.deps.geocoding_repository.geocode(address)
        except UpstreamUnavailable as e:
            return upstream_error("geocoding results", e)
        results = [serialize_place(p) for p in places if p.location.is_finite]
        return JSONResponse({"count": len(results), "results": results})

    async def start(self) -> None:
        """Start the web server."""
        import uvicorn

        config = uvicorn.Config(
            self.build_app(),
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Serving on http://{self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
