"""
Places Lookup Service - Facade pattern for place search APIs.

Google Places Nearby Search is the initial provider.
"""

from .base import PlacesLookupError, PlacesLookupService
from .factory import get_places_lookup_service

__all__ = [
    "PlacesLookupError",
    "PlacesLookupService",
    "get_places_lookup_service",
]
