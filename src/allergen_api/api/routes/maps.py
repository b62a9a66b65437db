"""Google Maps routes.

Identity matching of a user-typed restaurant against Google Places, and the
nearby restaurant list.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from allergen_api.api.dependencies import RestaurantServiceDep
from allergen_api.core.exceptions import APIError, BadRequestError, UpstreamServiceError
from allergen_api.models.common import LatLng
from allergen_api.models.restaurant import NearbyRestaurant, RestaurantMatchResponse
from allergen_api.services.places import PlacesLookupError, get_places_lookup_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=RestaurantMatchResponse,
    summary="Match a restaurant against Google Places",
    description="""
Look for the Google place that is the restaurant the user typed, near the given point.
On a match the Google name and location replace the submitted ones and `apimatch` is `google`.
""",
)
async def match_restaurant(
    service: RestaurantServiceDep,
    restaurant_name: Annotated[
        str | None,
        Query(alias="restaurantName", max_length=200, description="Restaurant name as typed"),
    ] = None,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lng: Annotated[float | None, Query(ge=-180, le=180)] = None,
) -> RestaurantMatchResponse:
    """Google-only identity match."""
    if not restaurant_name or not restaurant_name.strip() or lat is None or lng is None:
        raise BadRequestError(
            "Missing required parameters",
            details={"required": ["restaurantName", "lat", "lng"]},
        )

    logger.info(f"Restaurant match request: name='{restaurant_name}'")

    try:
        return await service.google_only_match(restaurant_name.strip(), LatLng(lat=lat, lng=lng))

    except PlacesLookupError as e:
        logger.error(f"Places lookup error: {e.message}")
        raise UpstreamServiceError(e.message, provider=e.provider, error_code=e.error_code)
    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in restaurant match: {e}")
        raise APIError("Internal server error", status_code=500)


@router.get(
    "/nearby",
    response_model=list[NearbyRestaurant],
    summary="List restaurants near a point",
)
async def nearby_restaurants(
    service: RestaurantServiceDep,
    lat: Annotated[float, Query(ge=-90, le=90)],
    lng: Annotated[float, Query(ge=-180, le=180)],
) -> list[NearbyRestaurant]:
    """Restaurants around the user, in Google's order."""
    try:
        restaurants = await service.nearby(LatLng(lat=lat, lng=lng))
        logger.info(f"Nearby search returned {len(restaurants)} restaurants")
        return restaurants

    except PlacesLookupError as e:
        logger.error(f"Places lookup error: {e.message}")
        raise UpstreamServiceError(e.message, provider=e.provider, error_code=e.error_code)
    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in nearby search: {e}")
        raise APIError("Internal server error", status_code=500)


@router.get(
    "/health",
    summary="Check place lookup service health",
    description="Check if Google Places accepts the configured API key.",
)
async def check_places_health() -> dict:
    """
    Check if the place lookup service is healthy and available.

    Returns:
        dict with status, provider, and availability
    """
    try:
        service = get_places_lookup_service()
        is_healthy = await service.health_check()

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "provider": service.provider_name,
            "available": is_healthy,
        }
    except Exception as e:
        logger.error(f"Places health check failed: {e}")
        return {
            "status": "error",
            "provider": "unknown",
            "available": False,
            "error": str(e),
        }
