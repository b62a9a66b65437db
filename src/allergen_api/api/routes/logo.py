"""Brand logo route."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import Field

from allergen_api.api.dependencies import LogoServiceDep
from allergen_api.models.common import CamelModel
from allergen_api.services.logo_lookup import get_logo_lookup_service

router = APIRouter()
logger = logging.getLogger(__name__)


class LogoResponse(CamelModel):
    """Logo lookup result."""

    logo: str | None = Field(None, description="Logo image URL, or null")


@router.get(
    "",
    response_model=LogoResponse,
    summary="Look up a brand logo",
)
async def get_logo(
    logos: LogoServiceDep,
    name: Annotated[str, Query(min_length=1, max_length=200)],
    verified_name: Annotated[
        str | None,
        Query(alias="verifiedName", max_length=200, description="Google-verified name"),
    ] = None,
) -> LogoResponse:
    """Logo URL for a restaurant, or null."""
    if logos is None:
        logger.debug("Logo lookup skipped: logo.dev not configured")
        return LogoResponse(logo=None)

    logo = await logos.find_logo(name, verified_name)
    logger.info(f"Logo lookup for '{name}': {'found' if logo else 'none'}")
    return LogoResponse(logo=logo)


@router.get(
    "/health",
    summary="Check logo lookup service health",
    description="Check if logo.dev is configured and answering searches.",
)
async def check_logo_health() -> dict:
    """Logo lookup health. Reports ``not_configured`` when no key is set."""
    try:
        service = get_logo_lookup_service()
        if service is None:
            return {
                "status": "not_configured",
                "provider": "logo.dev",
                "available": False,
            }

        is_healthy = await service.health_check()

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "provider": service.provider_name,
            "available": is_healthy,
        }
    except Exception as e:
        logger.error(f"Logo health check failed: {e}")
        return {
            "status": "error",
            "provider": "unknown",
            "available": False,
            "error": str(e),
        }
