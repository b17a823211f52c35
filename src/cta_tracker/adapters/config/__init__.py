"""Configuration adapters."""

from cta_tracker.adapters.config.app_config import AppConfig
from cta_tracker.adapters.config.stop_table_loader import StopTableLoader

__all__ = ["AppConfig", "StopTableLoader"]
