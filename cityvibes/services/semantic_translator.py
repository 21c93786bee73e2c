"""Translate colloquial mood phrases into Foursquare search queries.

Resolution tiers, first accepted result wins:
1. Cache (normalized phrase, TTL)
2. Curated dictionary (exact phrase, whole word, substring)
3. LLM completion (JSON reply)
4. Fallback: the phrase itself at confidence 0.3
"""
import logging
from typing import Optional, Protocol, Union

from cityvibes.api.openai_completion_client import parse_json_response
from cityvibes.dao.cache import TTLCache
from cityvibes.dao.redis_translation_cache import RedisTranslationCache
from cityvibes.models import Translation, TranslationSource
from cityvibes.models.lexicon import VIBE_DICTIONARY
from cityvibes.metrics import TRANSLATION_RESULTS_TOTAL

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.3
LLM_DEFAULT_CONFIDENCE = 0.6
WORD_MATCH_FACTOR = 0.9
SUBSTRING_MATCH_FACTOR = 0.7

SYSTEM_PROMPT = "You are a semantic translator for place search. Always respond with valid JSON only."

TRANSLATION_PROMPT = """Translate this Spanish/Latino vibe to English search terms for Foursquare Places API.

Vibe: "{vibe}"

Respond with JSON only:
{{
  "query": "english search terms",
  "categories": ["foursquare_category_id"],
  "confidence": 0.8
}}

Common categories:
- 13065: Restaurant
- 13003: Bar
- 13032: Café
- 13002: Nightlife
- 10000: Arts & Entertainment
- 16000: Outdoors & Recreation

Focus on accuracy over creativity."""


class TextCompletionProvider(Protocol):
    """Anything that turns a prompt into reply text (OpenAICompletionClient, test stubs)."""

    async def complete(self, prompt: str, system_prompt: Optional[str] = None, **kwargs) -> str:
        ...


TranslationCache = Union[TTLCache, RedisTranslationCache]


def normalize_phrase(phrase: Optional[str]) -> str:
    return (phrase or "").strip().lower()


class SemanticTranslator:
    """Tiered phrase-to-query translator with a shared cache."""

    def __init__(
        self,
        cache: TranslationCache,
        completion_provider: Optional[TextCompletionProvider] = None,
        min_confidence: float = 0.7,
        llm_confidence_cap: float = 0.9,
    ):
        """Initialize translator.

        Args:
            cache: Translation cache (in-memory or Redis)
            completion_provider: LLM used when the dictionary is not confident; None disables the tier
            min_confidence: Dictionary/LLM results below this are not used
            llm_confidence_cap: Upper bound applied to LLM-reported confidence
        """
        self.cache = cache
        self.completion_provider = completion_provider
        self.min_confidence = min_confidence
        self.llm_confidence_cap = llm_confidence_cap

    async def translate(self, phrase: str) -> Translation:
        """Translate a mood phrase. Never raises.

        Args:
            phrase: Raw mood phrase

        Returns:
            Translation; source=fallback (confidence 0.3) when no tier was confident
        """
        key = normalize_phrase(phrase)

        cached = self.cache.get_fresh(key) if key else None
        if cached is not None:
            logger.debug(f"[SemanticTranslator] Cache hit for {key!r}")
            return cached.model_copy(update={"cached": True})

        translation = self.search_dictionary(phrase)
        if translation.is_accepted(self.min_confidence):
            return self._accept(key, translation)

        llm_translation = await self._translate_with_llm(phrase)
        if llm_translation is not None and llm_translation.is_accepted(self.min_confidence):
            return self._accept(key, llm_translation)

        logger.info(f"[SemanticTranslator] No confident translation for {key!r}, using original text")
        TRANSLATION_RESULTS_TOTAL.labels(source=TranslationSource.FALLBACK.value).inc()
        return self._fallback(phrase)

    def search_dictionary(self, phrase: str) -> Translation:
        """Look the phrase up in the curated dictionary.

        Exact phrase match returns the entry confidence. Otherwise whole-word
        matches score 0.9x and substring matches (either direction) 0.7x of
        the entry confidence; the highest score wins.
        """
        key = normalize_phrase(phrase)
        if not key:
            return self._fallback(phrase)

        exact = VIBE_DICTIONARY.get(key)
        if exact is not None:
            return Translation(
                original_phrase=phrase,
                translated_query=exact.query,
                categories=exact.categories,
                confidence=exact.confidence,
                source=TranslationSource.DICTIONARY,
            )

        words = key.split()
        best_entry = None
        best_confidence = 0.0

        for entry_key, entry in VIBE_DICTIONARY.items():
            if entry_key in words:
                score = entry.confidence * WORD_MATCH_FACTOR
                if score > best_confidence:
                    best_entry, best_confidence = entry, score

            if entry_key in key or key in entry_key:
                score = entry.confidence * SUBSTRING_MATCH_FACTOR
                if score > best_confidence:
                    best_entry, best_confidence = entry, score

        if best_entry is None:
            return self._fallback(phrase)

        return Translation(
            original_phrase=phrase,
            translated_query=best_entry.query,
            categories=best_entry.categories,
            confidence=round(best_confidence, 4),
            source=TranslationSource.DICTIONARY,
        )

    async def _translate_with_llm(self, phrase: str) -> Optional[Translation]:
        """Ask the completion provider for a translation; None when the tier fails."""
        if self.completion_provider is None:
            logger.debug("[SemanticTranslator] No completion provider configured, skipping LLM tier")
            return None

        try:
            raw_text = await self.completion_provider.complete(
                TRANSLATION_PROMPT.format(vibe=phrase),
                system_prompt=SYSTEM_PROMPT,
                max_tokens=150,
                temperature=0.3,
                json_mode=True,
                endpoint="translate",
            )
        except Exception as e:
            logger.warning(f"[SemanticTranslator] LLM translation failed for {phrase!r}: {e}")
            return None

        parsed = parse_json_response(raw_text or "")
        query = parsed.get("query")
        if not isinstance(query, str) or not query.strip():
            logger.warning(f"[SemanticTranslator] LLM reply has no usable query for {phrase!r}")
            return None

        # Foursquare rejects category names, only numeric ids are forwarded
        categories = parsed.get("categories")
        if isinstance(categories, list):
            categories = [str(c).strip() for c in categories if str(c).strip().isdigit()] or None
        else:
            categories = None

        try:
            raw_confidence = parsed.get("confidence")
            confidence = float(LLM_DEFAULT_CONFIDENCE if raw_confidence is None else raw_confidence)
        except (TypeError, ValueError):
            confidence = LLM_DEFAULT_CONFIDENCE
        confidence = max(0.0, min(confidence, self.llm_confidence_cap))

        return Translation(
            original_phrase=phrase,
            translated_query=query.strip(),
            categories=categories,
            confidence=confidence,
            source=TranslationSource.LLM,
        )

    def _accept(self, key: str, translation: Translation) -> Translation:
        TRANSLATION_RESULTS_TOTAL.labels(source=translation.source.value).inc()
        logger.info(
            f"[SemanticTranslator] {key!r} -> {translation.translated_query!r} "
            f"({translation.source.value}, confidence={translation.confidence:.2f})"
        )
        if key:
            self.cache.put(key, translation)
        return translation

    def _fallback(self, phrase: str) -> Translation:
        return Translation(
            original_phrase=phrase or "",
            translated_query=phrase or "",
            confidence=FALLBACK_CONFIDENCE,
            source=TranslationSource.FALLBACK,
        )

    def cache_stats(self) -> dict:
        return self.cache.stats()

    def purge_expired(self) -> int:
        return self.cache.purge_expired()
