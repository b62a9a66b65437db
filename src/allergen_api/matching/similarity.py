"""
Name similarity scoring for restaurants and menu items.

Two scorers live here:

- ``tiered_similarity``: containment/word-hit scoring with fixed tiers
  (100 / 90 / 70 / 0). Restaurant identity matching, menu item matching and
  list ranking all sort or threshold on these exact values, so the tiers are
  part of the contract.
- ``positional_similarity``: character-by-position agreement, used only to
  decide whether a logo search hit belongs to the verified restaurant name.
"""

import math
import re

SCORE_EXACT = 100
SCORE_ALL_WORDS = 90
SCORE_SOME_WORDS = 70
SCORE_NONE = 0

_WHITESPACE = re.compile(r"\s+")
_WORD_SEPARATORS = re.compile(r"[\s,]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_label(text: str | None) -> str:
    """Lowercase and remove all whitespace."""
    return _WHITESPACE.sub("", (text or "").lower())


def tiered_similarity(candidate: str | None, query: str | None) -> int:
    """
    Score how well ``query`` describes ``candidate``.

    Returns:
        100 if either normalized string contains the other,
        90 if every word of the query occurs in the candidate,
        70 if some words occur, 0 otherwise.

    An empty query is contained in everything and scores 100.
    """
    a = normalize_label(candidate)
    b = normalize_label(query)
    if b in a or a in b:
        return SCORE_EXACT

    words = [w for w in _WORD_SEPARATORS.split((query or "").lower()) if w]
    hits = sum(1 for word in words if word in a)

    if hits == len(words):
        return SCORE_ALL_WORDS
    if hits > 0:
        return SCORE_SOME_WORDS
    return SCORE_NONE


def name_similarity(candidate: str | None, query: str | None) -> float:
    """``tiered_similarity`` on a 0-1 scale."""
    return tiered_similarity(candidate, query) / 100


def positional_similarity(a: str | None, b: str | None) -> int:
    """Percentage of aligned positions holding the same alphanumeric character."""
    a = _NON_ALNUM.sub("", (a or "").lower())
    b = _NON_ALNUM.sub("", (b or "").lower())
    if not a or not b:
        return 0
    if a == b:
        return 100

    matches = sum(1 for x, y in zip(a, b) if x == y)
    # round half up, not banker's rounding
    return math.floor(matches / max(len(a), len(b)) * 100 + 0.5)
