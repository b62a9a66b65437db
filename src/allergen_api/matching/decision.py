"""
Match decisions for restaurants and menu items.

Restaurant identity:
    A candidate is a match only when its name similarity clears the
    similarity gate AND it lies within the distance gate. Among the
    candidates that pass, the highest name similarity wins; on a tie the
    first one seen is kept.

Menu items:
    Continuous score = 0.7 * name similarity + 0.3 * allergen overlap,
    where overlap is |A ∩ B| / |A ∪ B| and two empty allergen sets
    overlap fully (1.0).

Everything here is a pure function over immutable inputs.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .geo import GeoPoint, haversine_m
from .similarity import name_similarity, normalize_label

logger = logging.getLogger(__name__)

# Menu item blend weights (must sum to 1.0)
WEIGHT_NAME = 0.7
WEIGHT_ALLERGENS = 0.3

ORIGIN = GeoPoint(0.0, 0.0)


@dataclass(frozen=True)
class MatchThresholds:
    """Gates applied by the match decisions."""

    name_similarity: float = 0.4  # 0-1 scale
    distance_m: float = 1000.0
    menu_similarity: float = 0.8


DEFAULT_THRESHOLDS = MatchThresholds()


@dataclass(frozen=True)
class Candidate:
    """A named, optionally geolocated entity being evaluated for a match."""

    name: str
    location: GeoPoint | None = None
    tags: frozenset[str] = frozenset()
    ref: Any = field(default=None, compare=False)  # original record, handed back to the caller

    @classmethod
    def from_record(cls, record: Any) -> "Candidate":
        """Build a candidate from a place record (mapping or object with name/location)."""
        if isinstance(record, Mapping):
            name = record.get("name") or ""
            location = record.get("location")
        else:
            name = getattr(record, "name", "") or ""
            location = getattr(record, "location", None)
        return cls(
            name=name,
            location=GeoPoint.coerce(location) if location is not None else None,
            ref=record,
        )


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing one candidate against a query."""

    candidate: Candidate
    score: float
    distance_m: float | None
    is_match: bool

    @property
    def distance_km(self) -> float | None:
        return None if self.distance_m is None else self.distance_m / 1000


@dataclass(frozen=True)
class MenuItemMatch:
    """Best target item found for one source menu item."""

    source_item: Any
    target_item: Any
    similarity: float
    is_match: bool


# =============================================================================
# Restaurant identity
# =============================================================================


def passes_match_gate(
    similarity: float,
    distance_m: float,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Both gates must hold. NaN on either side never passes."""
    return similarity >= thresholds.name_similarity and distance_m <= thresholds.distance_m


def evaluate_candidate(
    query: Candidate,
    candidate: Candidate,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> MatchResult:
    """Score one candidate against the query and apply the gates."""
    score = name_similarity(candidate.name, query.name)
    distance = haversine_m(candidate.location or ORIGIN, query.location or ORIGIN)
    is_match = bool(normalize_label(query.name)) and passes_match_gate(score, distance, thresholds)
    return MatchResult(candidate=candidate, score=score, distance_m=distance, is_match=is_match)


def select_best_candidate(
    query: Candidate,
    candidates: Iterable[Candidate],
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> MatchResult | None:
    """
    Pick the gated candidate with the highest name similarity.

    Returns None when nothing passes both gates, or when the query name is blank.
    """
    if not normalize_label(query.name):
        return None

    best: MatchResult | None = None
    for candidate in candidates:
        result = evaluate_candidate(query, candidate, thresholds)
        logger.debug(
            f"Candidate '{candidate.name}': score={result.score:.2f}, "
            f"distance={result.distance_m:.0f}m, match={result.is_match}"
        )
        if result.is_match and (best is None or result.score > best.score):
            best = result
    return best


# =============================================================================
# Menu items
# =============================================================================


def _item_name(item: Any) -> str:
    if isinstance(item, Mapping):
        return item.get("name") or ""
    return getattr(item, "name", "") or ""


def _allergen_set(item: Any) -> set[str]:
    """Allergen names of a menu item: the keys of its allergenIngredients."""
    if isinstance(item, Candidate):
        return set(item.tags)
    if isinstance(item, Mapping):
        ingredients = item.get("allergenIngredients", item.get("allergen_ingredients"))
    else:
        ingredients = getattr(item, "allergen_ingredients", None)
    if isinstance(ingredients, Mapping):
        return set(ingredients.keys())
    return set()


def allergen_overlap(a: Iterable[str], b: Iterable[str]) -> float:
    """Jaccard overlap of two allergen sets; two empty sets count as identical."""
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 1.0
    return len(set_a & set_b) / len(union)


def menu_item_similarity(item_a: Any, item_b: Any) -> float:
    """Blend of name similarity and allergen overlap, in [0, 1]."""
    name_score = name_similarity(_item_name(item_a), _item_name(item_b))
    allergen_score = allergen_overlap(_allergen_set(item_a), _allergen_set(item_b))
    return (name_score * WEIGHT_NAME) + (allergen_score * WEIGHT_ALLERGENS)


def find_best_menu_matches(
    source_items: Iterable[Any],
    target_items: Iterable[Any],
    threshold: float = DEFAULT_THRESHOLDS.menu_similarity,
) -> list[MenuItemMatch]:
    """
    For each source item, find the target item with the highest similarity.

    Source items with no target scoring above zero are left out of the result.
    """
    targets = list(target_items)
    matches: list[MenuItemMatch] = []

    for source in source_items:
        best_target = None
        best_score = 0.0
        for target in targets:
            score = menu_item_similarity(source, target)
            if score > best_score:
                best_score = score
                best_target = target

        if best_target is not None:
            matches.append(
                MenuItemMatch(
                    source_item=source,
                    target_item=best_target,
                    similarity=best_score,
                    is_match=best_score >= threshold,
                )
            )

    return matches
