"""Station candidate domain model."""

from dataclasses import dataclass, field

from cta_tracker.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class StationCandidate:
    """A transit station returned by a places search."""

    name: str
    location: Coordinate
    address: str
    source_label: str
    types: tuple[str, ...] = field(default_factory=tuple)
