"""Business logic services."""

from .menu_scan import MenuScanService, decode_image
from .restaurant import RestaurantService

__all__ = [
    "MenuScanService",
    "RestaurantService",
    "decode_image",
]
