"""
Ordering of a user's saved restaurant list.

With search text, the list is ordered by tiered name similarity, a close
hidden restaurant is surfaced at the top, and Google-verified restaurants
further than the radius are dropped. A restaurant with no stored location
is kept. Without search text but with a location, the list is ordered
nearest first and nothing is dropped.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .geo import GeoPoint, haversine_km, km_to_miles
from .similarity import SCORE_SOME_WORDS, tiered_similarity

DEFAULT_RADIUS_MILES = 10.0


@dataclass(frozen=True)
class RankedRestaurant:
    """A restaurant record annotated with the key it was ranked by."""

    restaurant: Any
    similarity: int | None = None
    distance_km: float | None = None


def _field(record: Any, *names: str) -> Any:
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _name(record: Any) -> str:
    return _field(record, "restaurantName", "restaurant_name", "name") or ""


def _location(record: Any) -> GeoPoint:
    return GeoPoint.coerce(_field(record, "location"))


def _has_location(record: Any) -> bool:
    location = _field(record, "location")
    if location is None:
        return False
    if isinstance(location, GeoPoint):
        return True
    if _field(location, "coordinates"):
        return True
    return _field(location, "lat") is not None and _field(location, "lng") is not None


def _is_hidden(record: Any) -> bool:
    return bool(_field(record, "hidden"))


def _is_google_verified(record: Any) -> bool:
    return _field(record, "apimatch") == "google"


def rank_restaurants(
    restaurants: Iterable[Any],
    search_text: str | None = None,
    location: GeoPoint | None = None,
    radius_miles: float = DEFAULT_RADIUS_MILES,
) -> list[RankedRestaurant]:
    """Order saved restaurants for display."""
    restaurants = list(restaurants)
    visible = [r for r in restaurants if not _is_hidden(r)]

    if search_text and search_text.strip():
        # A hidden restaurant that matches well is surfaced first
        best_hidden = None
        best_score = -1
        for r in restaurants:
            if not _is_hidden(r):
                continue
            score = tiered_similarity(_name(r), search_text)
            if score > best_score:
                best_score = score
                best_hidden = r

        ordered = visible
        if best_hidden is not None and best_score >= SCORE_SOME_WORDS:
            hidden_id = _field(best_hidden, "id")
            ordered = [best_hidden] + [
                r for r in visible if hidden_id is None or _field(r, "id") != hidden_id
            ]

        search = search_text.strip().lower()
        ranked = [
            RankedRestaurant(restaurant=r, similarity=tiered_similarity(_name(r), search))
            for r in ordered
        ]
        ranked.sort(key=lambda item: item.similarity, reverse=True)

        if location is not None:
            ranked = [
                item
                for item in ranked
                if not _is_google_verified(item.restaurant)
                or not _has_location(item.restaurant)
                or km_to_miles(haversine_km(location, _location(item.restaurant))) <= radius_miles
            ]
        return ranked

    if location is not None:
        ranked = [
            RankedRestaurant(restaurant=r, distance_km=haversine_km(location, _location(r)))
            for r in visible
        ]
        ranked.sort(key=lambda item: item.distance_km)
        return ranked

    return [RankedRestaurant(restaurant=r) for r in visible]
