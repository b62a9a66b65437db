"""
Restaurant identity matching against Google Places.

Ties the place lookup provider to the pure match decision: search around
the submitted point, gate every result on name similarity and distance,
keep the best. The verify flow adds a brand logo on top.
"""

import logging

from allergen_api.matching import (
    DEFAULT_THRESHOLDS,
    Candidate,
    GeoPoint,
    MatchThresholds,
    select_best_candidate,
)
from allergen_api.models.common import LatLng
from allergen_api.models.restaurant import (
    NearbyRestaurant,
    PlaceFound,
    PlaceMatch,
    PlaceNotFound,
    RestaurantMatchResponse,
    VerifiedRestaurant,
)
from allergen_api.services.logo_lookup import LogoLookupService
from allergen_api.services.places import PlacesLookupService

logger = logging.getLogger(__name__)

DEFAULT_NEARBY_RADIUS_M = 500


class RestaurantService:
    """Google identity matching, nearby search and verification for restaurants."""

    def __init__(
        self,
        places: PlacesLookupService,
        logos: LogoLookupService | None = None,
        thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
        nearby_radius_m: float = DEFAULT_NEARBY_RADIUS_M,
    ):
        self.places = places
        self.logos = logos
        self.thresholds = thresholds
        self.nearby_radius_m = nearby_radius_m

    async def match_place(self, restaurant_name: str, location: LatLng) -> PlaceMatch:
        """
        Find the Google place that is this restaurant.

        Searches within the distance threshold using the name as keyword,
        then keeps the highest-similarity result that passes both gates.

        Raises:
            PlacesLookupError: If the Places request fails
        """
        name = restaurant_name.strip()
        if not name:
            return PlaceNotFound()

        places = await self.places.search_nearby(
            location,
            radius_m=self.thresholds.distance_m,
            keyword=name,
        )

        query = Candidate(name=name, location=GeoPoint(location.lat, location.lng))
        best = select_best_candidate(
            query,
            (Candidate.from_record(place) for place in places),
            self.thresholds,
        )

        if best is None:
            logger.info(
                "No Google place matched",
                extra={"restaurant_name": name, "candidates": len(places)},
            )
            return PlaceNotFound()

        logger.info(
            "Google place matched",
            extra={
                "restaurant_name": name,
                "google_name": best.candidate.name,
                "score": round(best.score, 2),
                "distance_m": round(best.distance_m, 1),
            },
        )
        return PlaceFound(
            google_place=best.candidate.ref,
            score=best.score,
            distance_m=best.distance_m,
        )

    async def google_only_match(self, restaurant_name: str, location: LatLng) -> RestaurantMatchResponse:
        """Identity match; on success the Google name and location replace the submitted ones."""
        match = await self.match_place(restaurant_name, location)

        if isinstance(match, PlaceFound):
            return RestaurantMatchResponse(
                restaurant_name=match.google_place.name,
                location=match.google_place.location,
                apimatch="google",
                google_place=match.google_place,
            )

        return RestaurantMatchResponse(
            restaurant_name=restaurant_name,
            location=location,
            apimatch="none",
            google_place=None,
        )

    async def verify_restaurant(self, restaurant_name: str, location: LatLng) -> VerifiedRestaurant:
        """
        Verify a user-entered restaurant and fetch its brand logo.

        The logo is looked up by the verified name, which is the Google name
        when matched and the typed name otherwise.
        """
        match = await self.google_only_match(restaurant_name, location)
        verified_name = match.restaurant_name

        brand_logo = None
        if self.logos is not None:
            brand_logo = await self.logos.find_logo(verified_name, verified_name)

        return VerifiedRestaurant(
            restaurant_name=restaurant_name,
            verified_name=verified_name,
            location=match.location,
            apimatch=match.apimatch,
            google_place=match.google_place,
            brand_logo=brand_logo,
        )

    async def nearby(self, location: LatLng) -> list[NearbyRestaurant]:
        """Restaurants around a point, in Google's order."""
        places = await self.places.search_nearby(location, radius_m=self.nearby_radius_m)
        return [NearbyRestaurant(name=place.name, location=place.location) for place in places]
