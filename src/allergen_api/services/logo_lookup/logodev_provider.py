"""
logo.dev provider for brand logo lookup.

API Documentation: https://docs.logo.dev/
"""

import logging
from typing import Any

import httpx

from allergen_api.core.config import ClientConfig
from allergen_api.core.exceptions import ConfigurationError
from allergen_api.matching.similarity import positional_similarity

from .base import LogoCandidate, LogoLookupError, LogoLookupService

logger = logging.getLogger(__name__)


# Minimum positional similarity (0-100) between the searched and verified names
MIN_NAME_AGREEMENT = 70
# Minimum positional similarity (0-100) between a result and the verified name
MIN_RESULT_SIMILARITY = 40


class LogoDevLookup(LogoLookupService):
    """
    Logo lookup using the logo.dev brand search API.
    """

    def __init__(self, config: ClientConfig):
        """
        Initialize logo.dev provider.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.api_key:
            raise ConfigurationError("logodev_api_key", "logo.dev")

        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers={"Authorization": f"Bearer {config.api_key}"},
        )

    @property
    def provider_name(self) -> str:
        return "logo.dev"

    async def search(self, query: str) -> list[LogoCandidate]:
        """Search logo.dev for brands matching ``query``."""
        try:
            response = await self._client.get(
                f"{self.base_url}/search",
                params={"q": query},
            )
            response.raise_for_status()
            return self._parse_candidates(response.json())

        except httpx.HTTPStatusError as e:
            raise LogoLookupError(
                message=f"logo.dev API error: {e.response.status_code}",
                error_code="API_ERROR",
                provider=self.provider_name,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            raise LogoLookupError(
                message=f"Failed to connect to logo.dev: {e}",
                error_code="CONNECTION_ERROR",
                provider=self.provider_name,
            ) from e
        except ValueError as e:
            raise LogoLookupError(
                message="logo.dev returned invalid JSON",
                error_code="PARSE_ERROR",
                provider=self.provider_name,
            ) from e

    def _parse_candidates(self, data: Any) -> list[LogoCandidate]:
        """Accept either a bare list of ``{name, logo_url}`` or ``{logos: [{name, image}]}``."""
        if isinstance(data, list):
            entries, url_key = data, "logo_url"
        elif isinstance(data, dict) and isinstance(data.get("logos"), list):
            entries, url_key = data["logos"], "image"
        else:
            return []

        candidates = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            url = entry.get(url_key)
            candidates.append(
                LogoCandidate(
                    name=str(entry.get("name") or ""),
                    url=url if isinstance(url, str) and url else None,
                )
            )
        return candidates

    async def find_logo(self, name: str, verified_name: str | None = None) -> str | None:
        """
        Find a logo URL for ``name``.

        With a verified name, the search only runs when the two names agree
        and a result is only accepted when its own name resembles the
        verified one. Without one, the first result wins.
        """
        if verified_name and positional_similarity(name, verified_name) < MIN_NAME_AGREEMENT:
            logger.debug(f"Skipping logo lookup: {name!r} does not resemble {verified_name!r}")
            return None

        try:
            candidates = await self.search(name)
        except LogoLookupError as e:
            logger.warning(f"Logo lookup failed for {name!r}: {e.message}")
            return None

        if not verified_name:
            return candidates[0].url if candidates else None

        for candidate in candidates:
            if (
                candidate.url
                and positional_similarity(candidate.name, verified_name) >= MIN_RESULT_SIMILARITY
            ):
                return candidate.url

        return None

    async def health_check(self) -> bool:
        """Check that logo.dev answers a search."""
        try:
            response = await self._client.get(f"{self.base_url}/search", params={"q": "google"})
            return response.status_code == 200
        except Exception as e:
            logger.error(f"logo.dev health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
