"""
Base classes for place lookup.

Defines the abstract interface that place search providers implement.
"""

from abc import ABC, abstractmethod
from typing import Any

from allergen_api.models.common import LatLng
from allergen_api.models.restaurant import GooglePlace


class PlacesLookupError(Exception):
    """Error during place lookup."""

    def __init__(
        self,
        message: str,
        error_code: str = "LOOKUP_ERROR",
        provider: str = "unknown",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.provider = provider
        self.details = details or {}


class PlacesLookupService(ABC):
    """
    Abstract base class for place lookup services.

    Implementations search for restaurants around a point.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def search_nearby(
        self,
        location: LatLng,
        *,
        radius_m: float,
        keyword: str | None = None,
    ) -> list[GooglePlace]:
        """
        Search for restaurants around a point.

        Args:
            location: Centre of the search
            radius_m: Search radius in meters
            keyword: Optional free-text filter (usually a restaurant name)

        Returns:
            Places in the order the provider ranks them (empty if none)

        Raises:
            PlacesLookupError: If the provider fails or returns an error status
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is available."""
        ...

    async def close(self) -> None:
        """Release network resources."""
