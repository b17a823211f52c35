"""Vehicle position domain model."""

from dataclasses import dataclass

from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.transport_mode import TransportMode


@dataclass(frozen=True)
class VehiclePosition:
    """Live position of a single bus or train."""

    id: str
    mode: TransportMode
    route: str
    location: Coordinate
    heading: int | None
    destination: str
    delayed: bool
