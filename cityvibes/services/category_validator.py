"""Reject places whose category cannot host a given primary vibe."""
import logging
from typing import Iterable

from cityvibes.models import Place
from cityvibes.models.lexicon import DEFAULT_PRIMARY_VIBE, VIBE_RULES, VIBE_RULES_BY_NAME

logger = logging.getLogger(__name__)

UNKNOWN_VIBE_REASON = "Vibe general"


def is_compatible(primary_vibe: str, place: Place) -> bool:
    """Check a place against the primary vibe's category rules.

    Exclusions are absolute and checked first. A non-empty required set then
    acts as an allow-list. Unknown vibes accept every place.
    """
    rule = VIBE_RULES_BY_NAME.get(primary_vibe)
    if rule is None:
        return True

    category = place.category.lower()
    if category in rule.excluded_categories:
        logger.debug(f"[CategoryValidator] {place.name!r} ({category}) excluded for {primary_vibe}")
        return False

    if rule.required_categories and category not in rule.required_categories:
        logger.debug(f"[CategoryValidator] {place.name!r} ({category}) not allowed for {primary_vibe}")
        return False

    return True


def get_vibe_from_tokens(tokens: Iterable[str]) -> str:
    """Pick the primary vibe: first rule with a keyword equal to any token, else "chill"."""
    token_list = [t.lower() for t in tokens]
    for rule in VIBE_RULES:
        if any(token in rule.keywords for token in token_list):
            return rule.vibe
    return DEFAULT_PRIMARY_VIBE


def filter_compatible(primary_vibe: str, places: list[Place]) -> list[Place]:
    return [place for place in places if is_compatible(primary_vibe, place)]


def get_available_vibes() -> list[str]:
    return [rule.vibe for rule in VIBE_RULES]


def get_vibe_reason(vibe: str) -> str:
    rule = VIBE_RULES_BY_NAME.get(vibe)
    return rule.reason if rule is not None else UNKNOWN_VIBE_REASON
