"""Pydantic models for API schemas."""

from .common import CamelModel, LatLng
from .menu import (
    MenuItem,
    MenuItemMatchOut,
    MenuMatchRequest,
    MenuMatchResponse,
    MenuScanData,
    UploadMenuRequest,
    UploadMenuResponse,
    normalize_allergen_ingredients,
)
from .restaurant import (
    GeoJsonPoint,
    GooglePlace,
    NearbyRestaurant,
    PlaceFound,
    PlaceMatch,
    PlaceNotFound,
    RankedRestaurantOut,
    RankRestaurantsRequest,
    RestaurantMatchResponse,
    SavedRestaurant,
    VerifiedRestaurant,
    VerifyRestaurantRequest,
)

__all__ = [
    # Common
    "CamelModel",
    "LatLng",
    # Menu
    "MenuItem",
    "MenuItemMatchOut",
    "MenuMatchRequest",
    "MenuMatchResponse",
    "MenuScanData",
    "UploadMenuRequest",
    "UploadMenuResponse",
    "normalize_allergen_ingredients",
    # Restaurant
    "GeoJsonPoint",
    "GooglePlace",
    "NearbyRestaurant",
    "PlaceFound",
    "PlaceMatch",
    "PlaceNotFound",
    "RankedRestaurantOut",
    "RankRestaurantsRequest",
    "RestaurantMatchResponse",
    "SavedRestaurant",
    "VerifiedRestaurant",
    "VerifyRestaurantRequest",
]
