"""Application services (use cases) for nearby transit tracking."""

from cta_tracker.application.services.eta_estimator import EtaEstimator, estimate_eta
from cta_tracker.application.services.nearby_refresher import (
    NearbyRefresher,
    NearbySnapshot,
    build_snapshot,
)
from cta_tracker.application.services.proximity_aggregator import (
    AggregatorSettings,
    ProximityAggregator,
    build_proximity_result,
)
from cta_tracker.application.services.stop_arrival_service import StopArrivalService

__all__ = [
    "AggregatorSettings",
    "EtaEstimator",
    "NearbyRefresher",
    "NearbySnapshot",
    "ProximityAggregator",
    "StopArrivalService",
    "build_proximity_result",
    "build_snapshot",
    "estimate_eta",
]
