"""Stop arrival domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StopArrival:
    """A predicted train arrival at a fixed stop."""

    route: str
    destination: str
    station: str
    arrival_time: datetime | None
    minutes: int | None
    is_approaching: bool = False
    is_delayed: bool = False
