"""
Factory for creating logo lookup service instances.
"""

import logging
from functools import lru_cache

from allergen_api.core.config import get_settings

from .base import LogoLookupService
from .logodev_provider import LogoDevLookup

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_logo_lookup_service() -> LogoLookupService | None:
    """
    Get the configured logo lookup service.

    Logos are optional, so a missing key disables the lookup instead of
    failing requests.

    Returns:
        Configured LogoLookupService instance, or None if not configured
    """
    settings = get_settings()

    if not settings.is_logodev_configured:
        logger.warning("logo.dev lookup not configured (missing API key)")
        return None

    logger.info("Initializing logo.dev lookup service")

    return LogoDevLookup(config=settings.logodev_client_config())


async def close_service() -> None:
    """Close the cached provider, if one was created, and drop it from the cache."""
    if get_logo_lookup_service.cache_info().currsize:
        service = get_logo_lookup_service()
        if service is not None:
            await service.close()
    clear_service_cache()


def clear_service_cache():
    """Clear the cached service instance (useful for testing)."""
    get_logo_lookup_service.cache_clear()
