"""Pydantic models for restaurant lookup, verification and ranking."""

from typing import Literal

from pydantic import ConfigDict, Field

from .common import CamelModel, LatLng

ApiMatch = Literal["google", "none"]


class GooglePlace(CamelModel):
    """A Google Places result reduced to what the app stores."""

    name: str = Field(..., description="Place name as Google lists it")
    location: LatLng = Field(..., description="Place coordinates")
    icon: str | None = Field(None, description="Google category icon URL")


class PlaceFound(CamelModel):
    """A Google place passed both match gates."""

    found: Literal[True] = True
    google_place: GooglePlace
    score: float = Field(..., ge=0.0, le=1.0, description="Name similarity (0-1)")
    distance_m: float = Field(..., ge=0.0, description="Distance from the submitted location")


class PlaceNotFound(CamelModel):
    """No Google place passed the match gates."""

    found: Literal[False] = False


PlaceMatch = PlaceFound | PlaceNotFound


class NearbyRestaurant(CamelModel):
    """A restaurant from a nearby search."""

    name: str
    location: LatLng


class RestaurantMatchResponse(CamelModel):
    """Result of a Google-only identity match for a user-typed restaurant."""

    restaurant_name: str
    location: LatLng
    apimatch: ApiMatch
    google_place: GooglePlace | None = None


class VerifyRestaurantRequest(CamelModel):
    """Name and position the user entered for a restaurant."""

    restaurant_name: str = Field(..., min_length=1, max_length=200)
    location: LatLng = Field(default_factory=lambda: LatLng(lat=0.0, lng=0.0))


class VerifiedRestaurant(CamelModel):
    """A restaurant after Google identity matching and logo lookup."""

    restaurant_name: str = Field(..., description="Name as the user typed it")
    verified_name: str = Field(..., description="Google name if matched, else the typed name")
    location: LatLng
    apimatch: ApiMatch
    google_place: GooglePlace | None = None
    brand_logo: str | None = None


class GeoJsonPoint(CamelModel):
    """Location as stored on the device: GeoJSON point, [lng, lat]."""

    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(default_factory=list, max_length=2)


class SavedRestaurant(CamelModel):
    """
    A restaurant record from the device's local storage.

    Only the fields ranking needs are declared; everything else the app
    stores (menu items, timestamps, logo) passes through untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    restaurant_name: str = ""
    location: GeoJsonPoint | None = None
    apimatch: str | None = None
    hidden: bool | None = False


class RankRestaurantsRequest(CamelModel):
    restaurants: list[SavedRestaurant] = Field(default_factory=list)
    search_text: str | None = None
    location: LatLng | None = None
    radius_miles: float = Field(10.0, gt=0)


class RankedRestaurantOut(CamelModel):
    restaurant: SavedRestaurant
    similarity: int | None = None
    distance_km: float | None = None
