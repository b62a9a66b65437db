"""
Base classes and models for menu recognition.

Defines the abstract interface that all providers must implement,
plus standardized response models.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from allergen_api.models.menu import MenuItem


class MenuRecognitionResult(BaseModel):
    """Complete result from reading a menu photo."""

    menu_items: list[MenuItem] = Field(
        default_factory=list, description="Dishes found on the menu"
    )
    raw_response: str = Field(
        "", description="Raw model text (for debugging)"
    )
    provider: str = Field(
        ..., description="Provider that generated this result"
    )
    processing_time_ms: int = Field(
        0, ge=0, description="Time taken to process in milliseconds"
    )

    @property
    def is_empty(self) -> bool:
        return not self.menu_items


class MenuRecognitionError(Exception):
    """Error during menu recognition."""

    def __init__(
        self,
        message: str,
        error_code: str = "RECOGNITION_ERROR",
        provider: str = "unknown",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.provider = provider
        self.details = details or {}


class MenuRecognitionService(ABC):
    """
    Abstract base class for menu recognition services.

    Providers take a menu photo and return every dish with the allergens
    it contains.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def extract_menu(
        self,
        image_data: bytes,
        *,
        mime_type: str = "image/jpeg",
    ) -> MenuRecognitionResult:
        """
        Extract menu items and their allergens from a photo.

        Args:
            image_data: Raw image bytes
            mime_type: Image MIME type sent to the provider

        Returns:
            MenuRecognitionResult with the dishes found (possibly none)

        Raises:
            MenuRecognitionError: If the provider fails or answers with something unparseable
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is available and healthy.

        Returns:
            True if the provider is ready to accept requests
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
