"""Stop table loader."""

import logging

from cta_tracker.adapters.config.app_config import AppConfig
from cta_tracker.domain.models.stop_table import StopTable

logger = logging.getLogger(__name__)


class StopTableLoader:
    """Builds the stop table from built-in defaults plus configured stops."""

    @staticmethod
    def load(config: AppConfig) -> StopTable:
        """Load the stop table, adding ``[[stops]]`` entries from the TOML config."""
        overrides: dict[str, int] = {}

        for stop_data in config.get_stops_config():
            name = stop_data.get("name")
            stop_id = stop_data.get("stop_id")
            if not name or not isinstance(name, str):
                logger.warning(f"Skipping stop without a name: {stop_data}")
                continue
            try:
                overrides[name] = int(stop_id)
            except (TypeError, ValueError):
                logger.warning(f"Skipping stop '{name}' with invalid stop_id: {stop_id!r}")

        table = StopTable().with_overrides(overrides)
        if overrides:
            logger.info(f"Loaded {len(overrides)} configured stop(s); {len(table)} in total")
        return table
