"""Bootstrap logic wiring settings into logging and review sources."""

from __future__ import annotations

import httpx
import structlog

from dionysus.core.config import Settings, get_settings
from dionysus.core.loader import RatingLoader
from dionysus.core.logging import setup_logging
from dionysus.core.sources import YelpSource

logger = structlog.get_logger("dionysus.bootstrap")


def bootstrap_logging(settings: Settings | None = None) -> Settings:
    """Configure logging from settings.

    Development uses the console renderer on stdout; production writes JSON
    log files under settings.logs_dir. The level comes from settings.log_level.

    Returns:
        The settings used
    """
    settings = settings or get_settings()
    setup_logging(
        debug=settings.is_debug,
        logs_dir=settings.logs_dir if settings.is_production else None,
        level=settings.log_level,
    )
    return settings


def create_yelp_loader(
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> RatingLoader:
    """Create a rating loader backed by the configured Yelp source."""
    settings = settings or get_settings()
    if not settings.yelp_api_key:
        logger.warning("No Yelp API key configured, requests will be rejected")
    return RatingLoader(YelpSource.from_settings(settings, client=client))
