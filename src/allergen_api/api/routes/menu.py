"""Menu routes: photo scanning and menu item matching."""

import logging

from fastapi import APIRouter

from allergen_api.api.dependencies import MenuScanServiceDep, ThresholdsDep
from allergen_api.core.exceptions import APIError
from allergen_api.matching import find_best_menu_matches
from allergen_api.services.menu_recognition import get_menu_recognition_service
from allergen_api.models.menu import (
    MenuItemMatchOut,
    MenuMatchRequest,
    MenuMatchResponse,
    UploadMenuRequest,
    UploadMenuResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/upload-menu",
    response_model=UploadMenuResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Menu items, or success=false with reason no_menu"},
        400: {"description": "Image is not valid base64"},
        503: {"description": "Gemini not configured"},
    },
    summary="Extract menu items and allergens from a photo",
)
async def upload_menu(
    request: UploadMenuRequest,
    service: MenuScanServiceDep,
) -> UploadMenuResponse:
    """Scan a menu photo."""
    logger.info(
        "Menu upload received",
        extra={"image_chars": len(request.image)},
    )

    try:
        return await service.scan(request.image)

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in menu upload: {e}")
        raise APIError("Internal server error", status_code=500)


@router.get(
    "/menu/recognition/health",
    summary="Check menu recognition service health",
    description="Check if the menu recognition service (Gemini) is available.",
)
async def check_recognition_health() -> dict:
    """
    Check if the menu recognition service is healthy and available.

    Returns:
        dict with status, provider, and availability
    """
    try:
        service = get_menu_recognition_service()
        is_healthy = await service.health_check()

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "provider": service.provider_name,
            "available": is_healthy,
        }
    except Exception as e:
        logger.error(f"Recognition health check failed: {e}")
        return {
            "status": "error",
            "provider": "unknown",
            "available": False,
            "error": str(e),
        }


@router.post(
    "/menu/match",
    response_model=MenuMatchResponse,
    summary="Match menu items between two menus",
    description="""
For every source item, the target item with the highest blended similarity
(0.7 name, 0.3 allergen overlap). Source items with no target above zero are omitted.
""",
)
async def match_menu(
    request: MenuMatchRequest,
    thresholds: ThresholdsDep,
) -> MenuMatchResponse:
    """Best menu item matches."""
    matches = find_best_menu_matches(
        request.source_items,
        request.target_items,
        threshold=thresholds.menu_similarity,
    )

    return MenuMatchResponse(
        matches=[
            MenuItemMatchOut(
                source_item=m.source_item,
                target_item=m.target_item,
                similarity=m.similarity,
                is_match=m.is_match,
            )
            for m in matches
        ]
    )
