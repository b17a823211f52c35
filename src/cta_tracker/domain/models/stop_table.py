"""Static stop lookup table."""

from collections.abc import Mapping
from dataclasses import dataclass, field

# Station name -> CTA stop id used for per-stop arrival lookups.
DEFAULT_STOPS: dict[str, int] = {
    "Clark/Lake": 30112,
    "State/Lake": 30121,
    "Lake/Red": 30003,
    "Roosevelt": 40350,
}

# Ids in this range identify a parent station (all platforms); others are platform stops.
PARENT_STATION_ID_RANGE = range(40000, 50000)


@dataclass(frozen=True)
class StopTable:
    """Maps station names to CTA stop ids."""

    stops: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_STOPS))

    def get_stop_id(self, station_name: str) -> int | None:
        """Return the stop id for a station name, or None if not in the table."""
        return self.stops.get(station_name)

    def __contains__(self, station_name: object) -> bool:
        return station_name in self.stops

    def __len__(self) -> int:
        return len(self.stops)

    def with_overrides(self, overrides: Mapping[str, int]) -> "StopTable":
        """Return a new table with ``overrides`` added on top of this one."""
        merged = dict(self.stops)
        merged.update(overrides)
        return StopTable(stops=merged)


def is_parent_station_id(stop_id: int) -> bool:
    """Whether the id denotes a parent station rather than a single platform."""
    return stop_id in PARENT_STATION_ID_RANGE
