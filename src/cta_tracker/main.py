"""Main entry point for the CTA tracker HTTP service."""

import asyncio
import logging
import sys

import aiohttp

from cta_tracker.adapters.config import AppConfig
from cta_tracker.adapters.web import StarletteWebAdapter
from cta_tracker.wiring import build_dependencies

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def _warn_missing_keys(config: AppConfig) -> None:
    missing = [
        name
        for name, value in (
            ("CTA_TRAIN_KEY", config.cta_train_key),
            ("CTA_BUS_KEY", config.cta_bus_key),
            ("GOOGLE_MAPS_API_KEY_SERVER", config.google_maps_api_key_server),
        )
        if value is None
    ]
    for name in missing:
        logger.warning(f"{name} is not set; the endpoints that need it will answer with 500")


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"Starting CTA tracker in {config.environment} mode")
    _warn_missing_keys(config)

    # One session for every upstream call
    async with aiohttp.ClientSession() as session:
        try:
            dependencies = build_dependencies(config, session)
        except (ValueError, FileNotFoundError) as e:
            logger.error(f"Invalid stop configuration: {e}")
            sys.exit(1)

        logger.info(f"Stop table has {len(dependencies.stop_arrival_service.stop_table)} stop(s)")
        web_adapter = StarletteWebAdapter(dependencies)

        try:
            await web_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await web_adapter.stop()


def run() -> None:
    """Synchronous entry point for the ``cta-tracker-server`` script."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
