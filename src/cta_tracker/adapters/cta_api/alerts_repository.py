"""CTA Customer Alerts repository adapter."""

import logging
from typing import Any

from cta_tracker.adapters.cta_api.alert_parser import parse_alerts
from cta_tracker.adapters.cta_api.constants import ALERTS_PROVIDER, ALERTS_URL
from cta_tracker.adapters.http.upstream_client import UpstreamHttpClient
from cta_tracker.domain.errors import UpstreamUnavailable
from cta_tracker.domain.models.service_alert import AlertFeed
from cta_tracker.domain.ports.alert_repository import AlertRepository

logger = logging.getLogger(__name__)


class CtaAlertsRepository(AlertRepository):
    """Adapter for the CTA detailed alerts feed (no key required)."""

    def __init__(self, http_client: UpstreamHttpClient) -> None:
        """Initialize with the shared HTTP client."""
        self._http = http_client

    async def get_alerts(
        self,
        route_id: str | None = None,
        active_only: str | None = None,
        planned: str | None = None,
        accessibility: str | None = None,
    ) -> AlertFeed:
        """Get alerts, passing the optional filters through to the feed."""
        params: dict[str, Any] = {"outputType": "JSON"}
        if route_id:
            params["routeid"] = route_id
        if active_only:
            params["activeonly"] = active_only
        if planned:
            params["planned"] = planned
        if accessibility:
            params["accessibility"] = accessibility

        payload = await self._http.get_json(ALERTS_PROVIDER, ALERTS_URL, params)
        data = payload.get("CTAAlerts") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise UpstreamUnavailable(ALERTS_PROVIDER, "unexpected payload")

        feed = parse_alerts(data)
        logger.debug(f"Fetched {len(feed.alerts)} alert(s)")
        return feed
