"""
Base classes and models for brand logo lookup.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class LogoCandidate(BaseModel):
    """A brand returned by a logo search."""

    name: str = Field("", description="Brand name as the provider lists it")
    url: str | None = Field(None, description="Logo image URL")


class LogoLookupError(Exception):
    """Error during logo lookup."""

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


class LogoLookupService(ABC):
    """
    Abstract base class for logo lookup services.

    A logo is decoration: ``find_logo`` answers None rather than raising when
    nothing suitable is found or the provider is down.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[LogoCandidate]:
        """
        Search the provider for brands matching a name.

        Raises:
            LogoLookupError: If the provider fails
        """
        ...

    @abstractmethod
    async def find_logo(self, name: str, verified_name: str | None = None) -> str | None:
        """
        Find a logo URL for a restaurant.

        Args:
            name: Name to search for
            verified_name: Google-verified name the result must resemble

        Returns:
            Logo URL, or None
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is available."""
        ...

    async def close(self) -> None:
        """Release network resources."""
