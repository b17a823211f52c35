"""Stop arrival service port."""

from datetime import datetime
from typing import Protocol

from cta_tracker.domain.models.stop_arrival import StopArrival
from cta_tracker.domain.models.stop_table import StopTable


class StopArrivalService(Protocol):
    """Port for next arrivals at stations of the static stop table."""

    stop_table: StopTable

    async def next_arrivals(
        self, station_name: str, now: datetime | None = None
    ) -> list[StopArrival] | None:
        """Get the next arrivals; None when the station is not in the stop table."""
        ...
