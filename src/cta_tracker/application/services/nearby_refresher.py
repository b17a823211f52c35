"""Periodic refresh of nearby transit and ETAs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from cta_tracker.domain.contracts.nearby_refresher import NearbyRefresherProtocol
from cta_tracker.domain.models.coordinate import Coordinate
from cta_tracker.domain.models.eta_estimate import EtaEstimate
from cta_tracker.domain.models.proximity_result import ProximityResult

from .eta_estimator import EtaEstimator
from .proximity_aggregator import ProximityAggregator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NearbySnapshot:
    """A proximity result with ETAs computed for one refresh tick."""

    generation: int
    result: ProximityResult
    station_etas: list[EtaEstimate] = field(default_factory=list)
    bus_etas: list[EtaEstimate] = field(default_factory=list)
    train_etas: list[EtaEstimate] = field(default_factory=list)
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(UTC))


def build_snapshot(
    generation: int, result: ProximityResult, estimator: EtaEstimator
) -> NearbySnapshot:
    """Compute fresh ETAs for every entity of ``result``."""
    center = result.center
    return NearbySnapshot(
        generation=generation,
        result=result,
        station_etas=[estimator.for_station(center, s) for s in result.stations],
        bus_etas=[estimator.for_vehicle(center, v) for v in result.buses],
        train_etas=[estimator.for_vehicle(center, v) for v in result.trains],
    )


class NearbyRefresher(NearbyRefresherProtocol):
    """Re-runs the aggregation and ETA computation on a fixed interval.

    Each tick completes its network round trip before the next interval
    starts, so ticks never overlap. Snapshots are published last-write-wins
    by generation.
    """

    def __init__(
        self,
        aggregator: ProximityAggregator,
        estimator: EtaEstimator,
        center_provider: Callable[[], Coordinate],
        on_update: Callable[[NearbySnapshot], Awaitable[None] | None] | None = None,
        interval_seconds: float = 30.0,
    ) -> None:
        """Initialize the refresher.

        Args:
            aggregator: Produces proximity results.
            estimator: Computes per-entity ETAs.
            center_provider: Returns the current reference coordinate on every tick.
            on_update: Called with each newly published snapshot.
            interval_seconds: Delay between the end of one tick and the start of the next.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.aggregator = aggregator
        self.estimator = estimator
        self.center_provider = center_provider
        self.on_update = on_update
        self.interval_seconds = interval_seconds
        self.latest: NearbySnapshot | None = None
        self._generation = 0
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the refresh loop."""
        if self._task is not None and not self._task.done():
            logger.warning("Nearby refresher already running")
            return
        self._task = asyncio.create_task(self._refresh_loop())
        logger.info(f"Started nearby refresher (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the refresh loop."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Nearby refresher cancelled")
            logger.info("Stopped nearby refresher")

    async def wait(self) -> None:
        """Block until the refresh loop ends."""
        if self._task is not None:
            await self._task

    async def refresh_once(self) -> NearbySnapshot:
        """Run a single tick and publish its snapshot."""
        self._generation += 1
        generation = self._generation
        result = await self.aggregator.aggregate(self.center_provider())
        snapshot = build_snapshot(generation, result, self.estimator)
        await self.publish(snapshot)
        return snapshot

    async def publish(self, snapshot: NearbySnapshot) -> bool:
        """Publish a snapshot unless a newer generation is already displayed."""
        if self.latest is not None and snapshot.generation < self.latest.generation:
            logger.debug(
                f"Dropping stale snapshot {snapshot.generation} "
                f"(latest is {self.latest.generation})"
            )
            return False
        self.latest = snapshot
        if self.on_update is not None:
            maybe_awaitable = self.on_update(snapshot)
            if maybe_awaitable is not None:
                await maybe_awaitable
        return True

    async def _refresh_with_error_handling(self) -> None:
        try:
            await self.refresh_once()
        except Exception as e:
            # Keep the loop alive; the next tick retries
            logger.error(f"Nearby refresh failed (will retry): {e}", exc_info=True)

    async def _refresh_loop(self) -> None:
        try:
            while True:
                await self._refresh_with_error_handling()
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.info("Nearby refresher cancelled")
            raise
