"""Deterministic relevance scoring of a place against vibe tokens."""
from typing import Iterable, Optional

from cityvibes.models import MoodGroup, Place
from cityvibes.models.lexicon import MOOD_GROUP_AFFINITY

EXACT_TAG_MATCH = 2.0
PARTIAL_TAG_MATCH = 1.0
NAME_MATCH = 0.5
CATEGORY_MATCH = 0.5

CATEGORY_AFFINITY_BONUS = 1.0
TAG_AFFINITY_BONUS = 0.8

# (minimum rating, bonus), checked top-down
QUALITY_BANDS = ((4.5, 0.5), (4.0, 0.3), (3.5, 0.1))


def mood_group_bonus(place: Place, mood_group: Optional[MoodGroup]) -> float:
    """+1.0 when the category fits the group, +0.8 when only a tag does."""
    if mood_group is None:
        return 0.0
    categories, tags = MOOD_GROUP_AFFINITY.get(mood_group, (frozenset(), frozenset()))
    if place.category in categories:
        return CATEGORY_AFFINITY_BONUS
    if any(tag in tags for tag in place.tags):
        return TAG_AFFINITY_BONUS
    return 0.0


def quality_bonus(place: Place) -> float:
    rating = place.rating_value
    for threshold, bonus in QUALITY_BANDS:
        if rating >= threshold:
            return bonus
    return 0.0


def score(place: Place, tokens: Iterable[str], mood_group: Optional[MoodGroup] = None) -> float:
    """Score a place for a set of vibe tokens.

    Pure and deterministic: same inputs always give the same float.

    Args:
        place: Candidate place
        tokens: Lower-case vibe tokens
        mood_group: Detected mood group, if any

    Returns:
        Non-negative relevance score
    """
    name = place.name.lower()
    category = place.category.lower()
    tags = [tag.lower() for tag in place.tags]
    total = 0.0

    for token in tokens:
        token = token.lower()
        if not token:
            continue

        for tag in tags:
            if tag == token:
                total += EXACT_TAG_MATCH
            elif token in tag or tag in token:
                total += PARTIAL_TAG_MATCH

        if token in name:
            total += NAME_MATCH
        if token in category:
            total += CATEGORY_MATCH

    total += mood_group_bonus(place, mood_group)
    total += quality_bonus(place)
    return total
