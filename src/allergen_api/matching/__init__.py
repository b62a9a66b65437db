"""
Restaurant and menu item matching.

Pure functions only: name similarity, haversine distance and the
threshold/blend decisions built on them.
"""

from .decision import (
    DEFAULT_THRESHOLDS,
    Candidate,
    MatchResult,
    MatchThresholds,
    MenuItemMatch,
    allergen_overlap,
    evaluate_candidate,
    find_best_menu_matches,
    menu_item_similarity,
    passes_match_gate,
    select_best_candidate,
)
from .geo import GeoPoint, haversine_km, haversine_m, km_to_miles
from .ranking import RankedRestaurant, rank_restaurants
from .similarity import name_similarity, positional_similarity, tiered_similarity

__all__ = [
    "DEFAULT_THRESHOLDS",
    "Candidate",
    "GeoPoint",
    "MatchResult",
    "MatchThresholds",
    "MenuItemMatch",
    "RankedRestaurant",
    "allergen_overlap",
    "evaluate_candidate",
    "find_best_menu_matches",
    "haversine_km",
    "haversine_m",
    "km_to_miles",
    "menu_item_similarity",
    "name_similarity",
    "passes_match_gate",
    "positional_similarity",
    "rank_restaurants",
    "select_best_candidate",
    "tiered_similarity",
]
