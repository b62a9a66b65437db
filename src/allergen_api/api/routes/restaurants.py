"""Restaurant routes: verification for the edit/save flow, and list ranking."""

import logging

from fastapi import APIRouter

from allergen_api.api.dependencies import RestaurantServiceDep
from allergen_api.core.exceptions import APIError, UpstreamServiceError
from allergen_api.matching import GeoPoint, rank_restaurants
from allergen_api.models.restaurant import (
    RankedRestaurantOut,
    RankRestaurantsRequest,
    VerifiedRestaurant,
    VerifyRestaurantRequest,
)
from allergen_api.services.places import PlacesLookupError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/verify",
    response_model=VerifiedRestaurant,
    summary="Verify a restaurant and fetch its logo",
    description="""
Match the typed restaurant against Google Places, then look up a brand logo for the
verified name. A missing logo never fails the request.
""",
)
async def verify_restaurant(
    request: VerifyRestaurantRequest,
    service: RestaurantServiceDep,
) -> VerifiedRestaurant:
    """Identity match plus brand logo."""
    logger.info(
        "Restaurant verify request",
        extra={"restaurant_name": request.restaurant_name},
    )

    try:
        result = await service.verify_restaurant(request.restaurant_name, request.location)

    except PlacesLookupError as e:
        logger.error(f"Places lookup error: {e.message}")
        raise UpstreamServiceError(e.message, provider=e.provider, error_code=e.error_code)
    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in restaurant verify: {e}")
        raise APIError("Internal server error", status_code=500)

    logger.info(
        "Restaurant verified",
        extra={
            "apimatch": result.apimatch,
            "verified_name": result.verified_name,
            "has_logo": result.brand_logo is not None,
        },
    )
    return result


@router.post(
    "/rank",
    response_model=list[RankedRestaurantOut],
    response_model_exclude_none=True,
    summary="Order saved restaurants for display",
    description="""
With `searchText`, restaurants are ordered by name similarity, a closely matching
hidden restaurant is surfaced first, and Google-verified restaurants beyond
`radiusMiles` of `location` are dropped. With only `location`, nearest first.
""",
)
async def rank(request: RankRestaurantsRequest) -> list[RankedRestaurantOut]:
    """Rank a restaurant list."""
    location = (
        GeoPoint(request.location.lat, request.location.lng)
        if request.location is not None
        else None
    )

    ranked = rank_restaurants(
        request.restaurants,
        search_text=request.search_text,
        location=location,
        radius_miles=request.radius_miles,
    )

    return [
        RankedRestaurantOut(
            restaurant=item.restaurant,
            similarity=item.similarity,
            distance_km=item.distance_km,
        )
        for item in ranked
    ]
