"""
Factory for creating menu recognition service instances.

Reads configuration from settings and returns the appropriate provider.
"""

import logging
from functools import lru_cache

from allergen_api.core.config import get_settings

from .base import MenuRecognitionService
from .gemini_provider import GeminiMenuRecognition

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_menu_recognition_service() -> MenuRecognitionService:
    """
    Get the configured menu recognition service.

    Configuration is read from settings:
    - gemini_api_key: Google AI Studio API key
    - gemini_model: Vision model used for menu photos
    - gemini_api_base_url / gemini_timeout: connection settings

    Returns:
        Configured MenuRecognitionService instance

    Raises:
        ConfigurationError: If no Gemini API key is set
    """
    settings = get_settings()

    logger.info(f"Initializing Gemini menu recognition with model {settings.gemini_model}")

    return GeminiMenuRecognition(
        config=settings.gemini_client_config(),
        model=settings.gemini_model,
    )


async def close_service() -> None:
    """Close the cached provider, if one was created, and drop it from the cache."""
    if get_menu_recognition_service.cache_info().currsize:
        await get_menu_recognition_service().close()
    clear_service_cache()


def clear_service_cache():
    """Clear the cached service instance (useful for testing)."""
    get_menu_recognition_service.cache_clear()
