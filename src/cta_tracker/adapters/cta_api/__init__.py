"""CTA API adapters."""

from cta_tracker.adapters.cta_api.alerts_repository import CtaAlertsRepository
from cta_tracker.adapters.cta_api.bus_tracker_repository import CtaBusTrackerRepository
from cta_tracker.adapters.cta_api.train_tracker_repository import CtaTrainTrackerRepository

__all__ = [
    "CtaAlertsRepository",
    "CtaBusTrackerRepository",
    "CtaTrainTrackerRepository",
]
