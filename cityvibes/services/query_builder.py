"""Build a places-search query from vibe tokens."""
from typing import Iterable, Optional

from cityvibes.models.lexicon import ACTIVITY_TERMS, ATMOSPHERE_TERMS, PLACE_CATEGORY_TERMS

RAW_TOKEN_FALLBACK_COUNT = 2


def _first_term(tokens: list[str], terms: dict[str, str]) -> Optional[str]:
    for token in tokens:
        if token in terms:
            return terms[token]
    return None


def build_query(tokens: Iterable[str]) -> str:
    """Join the first activity, atmosphere and place-category term found.

    Terms keep that priority order. With no known term, the first two raw
    tokens are used instead.
    """
    token_list = list(tokens)
    parts: list[str] = []
    for terms in (ACTIVITY_TERMS, ATMOSPHERE_TERMS, PLACE_CATEGORY_TERMS):
        term = _first_term(token_list, terms)
        if term and term not in parts:
            parts.append(term)

    if not parts:
        parts = token_list[:RAW_TOKEN_FALLBACK_COUNT]

    return " ".join(parts)
