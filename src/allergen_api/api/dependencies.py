"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends

from allergen_api.core.config import Settings, get_settings
from allergen_api.matching import MatchThresholds
from allergen_api.services.logo_lookup import LogoLookupService, get_logo_lookup_service
from allergen_api.services.menu_recognition import get_menu_recognition_service
from allergen_api.services.menu_scan import MenuScanService
from allergen_api.services.places import get_places_lookup_service
from allergen_api.services.restaurant import RestaurantService


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_match_thresholds(settings: SettingsDep) -> MatchThresholds:
    """Match gates from settings."""
    return MatchThresholds(
        name_similarity=settings.restaurant_similarity_threshold,
        distance_m=settings.restaurant_distance_threshold_m,
        menu_similarity=settings.menu_similarity_threshold,
    )


ThresholdsDep = Annotated[MatchThresholds, Depends(get_match_thresholds)]


def get_logo_service() -> LogoLookupService | None:
    """
    Get the logo lookup service.

    Returns:
        LogoLookupService, or None when logo.dev is not configured
    """
    return get_logo_lookup_service()


LogoServiceDep = Annotated[LogoLookupService | None, Depends(get_logo_service)]


def get_restaurant_service(
    settings: SettingsDep,
    thresholds: ThresholdsDep,
    logos: LogoServiceDep,
) -> RestaurantService:
    """
    Get RestaurantService instance.

    Raises:
        ConfigurationError: If Google Places is not configured
    """
    return RestaurantService(
        places=get_places_lookup_service(),
        logos=logos,
        thresholds=thresholds,
        nearby_radius_m=settings.nearby_radius_m,
    )


def get_menu_scan_service() -> MenuScanService:
    """
    Get MenuScanService instance.

    Raises:
        ConfigurationError: If Gemini is not configured
    """
    return MenuScanService(get_menu_recognition_service())


# Type aliases for service dependencies
RestaurantServiceDep = Annotated[RestaurantService, Depends(get_restaurant_service)]
MenuScanServiceDep = Annotated[MenuScanService, Depends(get_menu_scan_service)]
