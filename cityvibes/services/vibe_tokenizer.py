"""Expand a free-text mood phrase into canonical vibe tokens."""
import logging
from typing import Optional

from cityvibes.models import MoodGroup, VibeTokens
from cityvibes.models.lexicon import VIBE_EXPANSIONS, VIBE_RULES

logger = logging.getLogger(__name__)

# Raw-word fallback keeps words longer than this
MIN_RAW_WORD_LENGTH = 2


def detect_mood_group(lowered_input: str) -> Optional[MoodGroup]:
    """Return the mood group of the first vibe rule with a keyword in the input."""
    for rule in VIBE_RULES:
        if any(keyword in lowered_input for keyword in rule.keywords):
            return rule.mood_group
    return None


def tokenize(raw_input: Optional[str]) -> VibeTokens:
    """Tokenize a mood phrase.

    Matching is substring-based on the lower-cased input, so "bellakeo"
    inside a longer sentence still expands. Never raises.

    Args:
        raw_input: Free-text mood, e.g. "quiero bellakeo" or "café tranquilo"

    Returns:
        VibeTokens with de-duplicated tokens in first-seen order
    """
    lowered = (raw_input or "").strip().lower()
    if not lowered:
        return VibeTokens()

    mood_group = detect_mood_group(lowered)
    tokens: list[str] = []

    # Keys found in the input bring all their expansions
    for key, expansions in VIBE_EXPANSIONS.items():
        if key in lowered:
            tokens.append(key)
            tokens.extend(expansions)

    # Expansions found in the input bring back their owning key
    for key, expansions in VIBE_EXPANSIONS.items():
        for value in expansions:
            if value in lowered and value not in tokens:
                tokens.extend([value, key])

    if not tokens:
        tokens = [word for word in lowered.split() if len(word) > MIN_RAW_WORD_LENGTH]
        logger.debug(f"[VibeTokenizer] No lexicon match for {lowered!r}, using raw words")

    result = VibeTokens(tokens=tokens, mood_group=mood_group)
    logger.debug(f"[VibeTokenizer] {lowered!r} -> {result.tokens} (mood_group={mood_group})")
    return result
