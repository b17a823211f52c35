"""Service alert domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AlertSeverity:
    """Severity block of a CTA alert."""

    score: str | None
    color: str
    type: str | None


@dataclass(frozen=True)
class ImpactedService:
    """A route or station affected by an alert."""

    type: str | None
    name: str | None
    id: str | None
    background_color: str
    text_color: str
    url: str


@dataclass(frozen=True)
class ServiceAlert:
    """A normalized CTA customer alert."""

    id: str | None
    headline: str | None
    short_description: str | None
    full_description: str | None
    severity: AlertSeverity
    impact: str | None
    event_start: str | None
    event_end: str | None
    open_ended: bool
    major_alert: bool
    url: str | None
    impacted_services: list[ImpactedService] = field(default_factory=list)


@dataclass(frozen=True)
class AlertFeed:
    """Alerts together with the upstream timestamp."""

    timestamp: str | None
    alerts: list[ServiceAlert] = field(default_factory=list)
