"""Per-stop arrival lookup for stations in the static stop table."""

import logging
from datetime import datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from cta_tracker.application.services.eta_estimator import round_half_up
from cta_tracker.domain.models.stop_arrival import StopArrival
from cta_tracker.domain.models.stop_table import StopTable
from cta_tracker.domain.ports.arrival_repository import ArrivalRepository

logger = logging.getLogger(__name__)

CTA_TIMEZONE = ZoneInfo("America/Chicago")


def minutes_until(arrival_time: datetime, now: datetime) -> int:
    """Whole minutes from ``now`` until ``arrival_time``, never negative."""
    return round_half_up(max((arrival_time - now).total_seconds() / 60, 0.0))


def parse_arrival_time(value: Any, tz: tzinfo = CTA_TIMEZONE) -> datetime | None:
    """Parse a Train Tracker timestamp (``2024-05-01T14:03:20``, local time)."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


class StopArrivalService:
    """Looks up the next arrivals at known fixed stops."""

    def __init__(
        self,
        arrival_repository: ArrivalRepository,
        stop_table: StopTable,
        max_arrivals: int = 3,
        tz: tzinfo = CTA_TIMEZONE,
    ) -> None:
        """Initialize the service.

        Args:
            arrival_repository: Source of raw arrival predictions.
            stop_table: Stations eligible for arrival lookups.
            max_arrivals: Number of arrivals to return per stop (1-3 is typical).
            tz: Timezone of the upstream timestamps.
        """
        if max_arrivals < 1:
            raise ValueError("max_arrivals must be at least 1")
        self._arrival_repository = arrival_repository
        self.stop_table = stop_table
        self._max_arrivals = max_arrivals
        self._tz = tz

    async def next_arrivals(
        self, station_name: str, now: datetime | None = None
    ) -> list[StopArrival] | None:
        """Get the next arrivals for a station.

        Returns None when the station is not in the stop table, so callers can
        fall back to the coarse ETA estimate. A naive ``now`` is taken to be in
        the service timezone.
        """
        stop_id = self.stop_table.get_stop_id(station_name)
        if stop_id is None:
            return None

        payload = await self._arrival_repository.get_arrivals(stop_id)
        current = now or datetime.now(self._tz)
        if current.tzinfo is None:
            current = current.replace(tzinfo=self._tz)
        etas = _as_list((payload.get("ctatt") or {}).get("eta"))
        arrivals = [self._to_arrival(eta, current) for eta in etas[: self._max_arrivals]]
        logger.debug(f"{len(arrivals)} upcoming arrival(s) for {station_name} (stop {stop_id})")
        return arrivals

    def _to_arrival(self, eta: dict[str, Any], now: datetime) -> StopArrival:
        arrival_time = parse_arrival_time(eta.get("arrT"), self._tz)
        return StopArrival(
            route=str(eta.get("rt", "")),
            destination=str(eta.get("destNm", "")),
            station=str(eta.get("staNm", "")),
            arrival_time=arrival_time,
            minutes=minutes_until(arrival_time, now) if arrival_time else None,
            is_approaching=eta.get("isApp") == "1",
            is_delayed=eta.get("isDly") == "1",
        )
