"""Alert repository port."""

from typing import Protocol

from cta_tracker.domain.models.service_alert import AlertFeed


class AlertRepository(Protocol):
    """Port for customer service alerts."""

    async def get_alerts(
        self,
        route_id: str | None = None,
        active_only: str | None = None,
        planned: str | None = None,
        accessibility: str | None = None,
    ) -> AlertFeed:
        """Get normalized alerts, optionally filtered."""
        ...
