"""
Factory for creating place lookup service instances.
"""

import logging
from functools import lru_cache

from allergen_api.core.config import get_settings

from .base import PlacesLookupService
from .google_provider import GooglePlacesLookup

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_places_lookup_service() -> PlacesLookupService:
    """
    Get the configured place lookup service.

    Configuration is read from settings:
    - google_maps_api_key: Google Maps Platform API key
    - google_places_base_url / places_timeout: connection settings

    Raises:
        ConfigurationError: If no Google Maps API key is set
    """
    settings = get_settings()

    logger.info("Initializing Google Places lookup service")

    return GooglePlacesLookup(config=settings.places_client_config())


async def close_service() -> None:
    """Close the cached provider, if one was created, and drop it from the cache."""
    if get_places_lookup_service.cache_info().currsize:
        await get_places_lookup_service().close()
    clear_service_cache()


def clear_service_cache():
    """Clear the cached service instance (useful for testing)."""
    get_places_lookup_service.cache_clear()
