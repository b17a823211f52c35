"""Normalization of CTA customer alert payloads."""

from typing import Any

from cta_tracker.adapters.cta_api.vehicle_parser import as_list
from cta_tracker.domain.models.service_alert import (
    AlertFeed,
    AlertSeverity,
    ImpactedService,
    ServiceAlert,
)

CDATA_KEYS = ("#cdata-section", "#cdatasection")


def _cdata(value: Any) -> Any:
    """Unwrap XML-derived CDATA objects, passing plain values through."""
    if isinstance(value, dict):
        for key in CDATA_KEYS:
            if key in value:
                return value[key]
        return None
    return value


def _color(value: Any) -> str:
    return f"#{value}" if value is not None else "#"


def _parse_service(service: dict[str, Any]) -> ImpactedService:
    return ImpactedService(
        type=service.get("ServiceTypeDescription"),
        name=service.get("ServiceName"),
        id=service.get("ServiceId"),
        background_color=_color(service.get("ServiceBackColor")),
        text_color=_color(service.get("ServiceTextColor")),
        url=_cdata(service.get("ServiceURL")) or "",
    )


def parse_alert(alert: dict[str, Any]) -> ServiceAlert:
    """Normalize a single ``Alert`` object."""
    impacted = (alert.get("ImpactedService") or {}).get("Service")
    return ServiceAlert(
        id=alert.get("AlertId"),
        headline=alert.get("Headline"),
        short_description=alert.get("ShortDescription"),
        full_description=_cdata(alert.get("FullDescription")),
        severity=AlertSeverity(
            score=alert.get("SeverityScore"),
            color=_color(alert.get("SeverityColor")),
            type=alert.get("SeverityCSS"),
        ),
        impact=alert.get("Impact"),
        event_start=alert.get("EventStart"),
        event_end=alert.get("EventEnd") or None,
        open_ended=alert.get("TBD") == "1",
        major_alert=alert.get("MajorAlert") == "1",
        url=_cdata(alert.get("AlertURL")) or None,
        impacted_services=[
            _parse_service(service) for service in as_list(impacted) if isinstance(service, dict)
        ],
    )


def parse_alerts(data: dict[str, Any]) -> AlertFeed:
    """Normalize the ``CTAAlerts`` object; a single alert becomes a one-element list."""
    return AlertFeed(
        timestamp=data.get("TimeStamp"),
        alerts=[
            parse_alert(alert) for alert in as_list(data.get("Alert")) if isinstance(alert, dict)
        ],
    )
