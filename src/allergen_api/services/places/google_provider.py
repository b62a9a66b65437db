"""
Google Places provider for restaurant lookup.

Uses the Places API Nearby Search endpoint.
API Documentation: https://developers.google.com/maps/documentation/places/web-service/search-nearby
"""

import logging

import httpx
from pydantic import BaseModel, ValidationError

from allergen_api.core.config import ClientConfig
from allergen_api.core.exceptions import ConfigurationError
from allergen_api.models.common import LatLng
from allergen_api.models.restaurant import GooglePlace

from .base import PlacesLookupError, PlacesLookupService

logger = logging.getLogger(__name__)


class _Point(BaseModel):
    lat: float
    lng: float


class _Geometry(BaseModel):
    location: _Point


class PlaceResult(BaseModel):
    """One entry of a Nearby Search ``results`` array."""

    name: str = ""
    geometry: _Geometry | None = None
    icon: str | None = None


class NearbySearchResponse(BaseModel):
    """Nearby Search response body."""

    status: str
    results: list[PlaceResult] = []
    error_message: str | None = None


class GooglePlacesLookup(PlacesLookupService):
    """
    Place lookup using the Google Places Nearby Search API.
    """

    def __init__(self, config: ClientConfig):
        """
        Initialize Google Places provider.

        Args:
            config: API key, base URL and timeout

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.api_key:
            raise ConfigurationError("google_maps_api_key", "Google Places")

        self.api_key = config.api_key
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout
        self._client = httpx.AsyncClient(timeout=config.timeout)

    @property
    def provider_name(self) -> str:
        return "google_places"

    async def search_nearby(
        self,
        location: LatLng,
        *,
        radius_m: float,
        keyword: str | None = None,
    ) -> list[GooglePlace]:
        """
        Search Google Places for restaurants near a point.

        ``ZERO_RESULTS`` is an empty list; any other non-OK status is an error.
        """
        try:
            params = {
                "location": f"{location.lat},{location.lng}",
                "radius": int(radius_m),
                "type": "restaurant",
                "key": self.api_key,
            }
            if keyword:
                params["keyword"] = keyword

            logger.info(
                f"Places nearby search: radius={int(radius_m)}m keyword={keyword!r}"
            )

            response = await self._client.get(
                f"{self.base_url}/nearbysearch/json",
                params=params,
            )
            response.raise_for_status()

            try:
                payload = NearbySearchResponse.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                raise PlacesLookupError(
                    message="Unexpected Places response shape",
                    error_code="PARSE_ERROR",
                    provider=self.provider_name,
                    details={"body": response.text[:2000]},
                ) from e

            if payload.status == "ZERO_RESULTS":
                return []

            if payload.status != "OK":
                raise PlacesLookupError(
                    message=f"Places API returned status {payload.status}",
                    error_code="UPSTREAM_STATUS",
                    provider=self.provider_name,
                    details={
                        "status": payload.status,
                        "error_message": payload.error_message,
                    },
                )

            places = []
            for result in payload.results:
                if result.geometry is None:
                    logger.warning(f"Skipping place without geometry: {result.name!r}")
                    continue
                places.append(
                    GooglePlace(
                        name=result.name,
                        location=LatLng(
                            lat=result.geometry.location.lat,
                            lng=result.geometry.location.lng,
                        ),
                        icon=result.icon,
                    )
                )

            logger.debug(f"Places returned {len(places)} results")
            return places

        except httpx.HTTPStatusError as e:
            raise PlacesLookupError(
                message=f"Places API error: {e.response.status_code}",
                error_code="API_ERROR",
                provider=self.provider_name,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            raise PlacesLookupError(
                message=f"Failed to connect to Google Places: {type(e).__name__}",
                error_code="CONNECTION_ERROR",
                provider=self.provider_name,
            ) from e
        except PlacesLookupError:
            raise
        except Exception as e:
            logger.exception("Unexpected error in place lookup")
            raise PlacesLookupError(
                message=f"Unexpected error: {e}",
                error_code="UNEXPECTED_ERROR",
                provider=self.provider_name,
            ) from e

    async def health_check(self) -> bool:
        """Check that the API key is accepted."""
        try:
            response = await self._client.get(
                f"{self.base_url}/nearbysearch/json",
                params={
                    "location": "0,0",
                    "radius": 1,
                    "type": "restaurant",
                    "key": self.api_key,
                },
            )
            if response.status_code != 200:
                return False
            return response.json().get("status") in ("OK", "ZERO_RESULTS")
        except Exception as e:
            logger.error(f"Google Places health check failed: {type(e).__name__}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
