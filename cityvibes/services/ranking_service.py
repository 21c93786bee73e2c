"""Mood-to-places ranking pipeline.

Stages: tokenize the mood, build a search query (translator may override),
fetch candidates, drop category-incompatible places, score, then keep the
top results with a rating-ordered backfill so a non-empty fetch never
yields an empty answer.
"""
import logging
import time
from typing import Optional

from cityvibes.errors import InputError, UpstreamFetchError
from cityvibes.models import (
    Place,
    PlaceScore,
    RankingStage,
    RankResult,
    RankTrace,
    ScoredPlace,
)
from cityvibes.services.category_validator import filter_compatible, get_vibe_from_tokens
from cityvibes.services.relevance_scorer import score
from cityvibes.services.place_search_service import PlaceSearchService
from cityvibes.services.query_builder import build_query
from cityvibes.services.semantic_translator import SemanticTranslator
from cityvibes.services.vibe_tokenizer import tokenize
from cityvibes.metrics import (
    BACKFILLED_PLACES_TOTAL,
    RANKING_DURATION_SECONDS,
    RANKING_REQUESTS_TOTAL,
    VALIDATION_FALLBACKS_TOTAL,
)

logger = logging.getLogger(__name__)

NO_PLACES_MESSAGE = "No places found for this vibe"
UPSTREAM_ERROR_MESSAGE = "Places provider unavailable, try again later"


class RankingService:
    """Orchestrates tokenizer, translator, places search, validator and scorer."""

    def __init__(
        self,
        place_search: PlaceSearchService,
        translator: SemanticTranslator,
        min_score: float = 0.5,
        max_results: int = 3,
        validation_fallback_limit: int = 15,
        search_limit: int = 50,
        min_translation_confidence: float = 0.7,
    ):
        self.place_search = place_search
        self.translator = translator
        self.min_score = min_score
        self.max_results = max_results
        self.validation_fallback_limit = validation_fallback_limit
        self.search_limit = search_limit
        self.min_translation_confidence = min_translation_confidence

    async def rank(
        self,
        mood: Optional[str],
        city: Optional[str],
        min_score: Optional[float] = None,
        max_results: Optional[int] = None,
    ) -> RankResult:
        """Rank places in a city for a mood phrase.

        Args:
            mood: Free-text mood, e.g. "bellakeo" or "café tranquilo para trabajar"
            city: City name
            min_score: Relevance threshold override
            max_results: Result count override

        Returns:
            RankResult; upstream failures come back as an empty result with fallback=True

        Raises:
            InputError: If mood or city is missing/blank (no upstream call is made)
        """
        min_score = self.min_score if min_score is None else min_score
        max_results = self.max_results if max_results is None else max_results

        if not mood or not mood.strip():
            RANKING_REQUESTS_TOTAL.labels(outcome="input_error").inc()
            raise InputError("mood")
        if not city or not city.strip():
            RANKING_REQUESTS_TOTAL.labels(outcome="input_error").inc()
            raise InputError("city")

        start_time = time.perf_counter()
        mood = mood.strip()
        city = city.strip()
        trace = RankTrace()

        # 1. Tokenize
        vibe_tokens = tokenize(mood)
        trace.tokens = vibe_tokens.tokens
        trace.mood_group = vibe_tokens.mood_group
        trace.stage = RankingStage.TOKENIZED

        # 2. Query (confident translation wins over the token-built query)
        query = build_query(vibe_tokens.tokens)
        category_filter = None
        translation = await self.translator.translate(mood)
        trace.translation = translation
        if translation.is_accepted(self.min_translation_confidence):
            query = translation.translated_query
            category_filter = translation.categories
        trace.query = query
        trace.category_filter = category_filter
        trace.stage = RankingStage.QUERY_BUILT

        logger.info(
            f"[RankingService] mood={mood!r} city={city!r} query={query!r} "
            f"categories={category_filter} mood_group={vibe_tokens.mood_group}"
        )

        # 3. Fetch candidates
        try:
            candidates = await self._fetch_candidates(city, query, category_filter)
        except UpstreamFetchError as e:
            trace.upstream_error = str(e)
            trace.stage = RankingStage.FAILED
            RANKING_REQUESTS_TOTAL.labels(outcome="upstream_error").inc()
            RANKING_DURATION_SECONDS.observe(time.perf_counter() - start_time)
            return RankResult(places=[], message=UPSTREAM_ERROR_MESSAGE, fallback=True, trace=trace)

        trace.candidates_fetched = len(candidates)
        trace.stage = RankingStage.CANDIDATES_FETCHED

        if not candidates:
            trace.stage = RankingStage.FINALIZED
            RANKING_REQUESTS_TOTAL.labels(outcome="no_results").inc()
            RANKING_DURATION_SECONDS.observe(time.perf_counter() - start_time)
            return RankResult(places=[], message=NO_PLACES_MESSAGE, fallback=True, trace=trace)

        # 4. Category validation
        primary_vibe = get_vibe_from_tokens(vibe_tokens.tokens)
        trace.primary_vibe = primary_vibe
        validated = filter_compatible(primary_vibe, candidates)
        if not validated:
            logger.info(
                f"[RankingService] No {primary_vibe} compatible places, "
                f"using first {self.validation_fallback_limit} candidates"
            )
            validated = candidates[:self.validation_fallback_limit]
            trace.validation_fallback = True
            VALIDATION_FALLBACKS_TOTAL.inc()
        trace.candidates_validated = len(validated)
        trace.stage = RankingStage.VALIDATED

        # 5. Score (sorted() is stable, so ties keep provider order)
        ranked = sorted(
            (
                ScoredPlace(
                    place=place,
                    relevance=score(place, vibe_tokens.tokens, vibe_tokens.mood_group),
                )
                for place in validated
            ),
            key=lambda scored: scored.relevance,
            reverse=True,
        )
        trace.stage = RankingStage.SCORED

        # 6. Threshold, cap and backfill
        selected = self.select_top(ranked, min_score, max_results)
        trace.scores = [
            PlaceScore(
                name=s.place.name,
                category=s.place.category,
                relevance=round(s.relevance, 3),
                backfilled=s.backfilled,
            )
            for s in selected
        ]
        trace.stage = RankingStage.FINALIZED

        places: list[Place] = [s.place for s in selected]
        RANKING_REQUESTS_TOTAL.labels(outcome="ranked").inc()
        RANKING_DURATION_SECONDS.observe(time.perf_counter() - start_time)
        logger.info(
            f"[RankingService] Returning {len(places)}/{len(candidates)} places "
            f"(vibe={primary_vibe}, fallback_validation={trace.validation_fallback})"
        )
        return RankResult(places=places, trace=trace)

    @staticmethod
    def select_top(ranked: list[ScoredPlace], min_score: float, max_results: int) -> list[ScoredPlace]:
        """Keep places at or above min_score, then backfill by rating up to max_results.

        Args:
            ranked: Scored places, sorted by relevance descending
            min_score: Relevance threshold
            max_results: Target result count

        Returns:
            At most max_results places; backfilled entries are flagged
        """
        selected = [s for s in ranked if s.relevance >= min_score][:max_results]

        if len(selected) < max_results:
            below = [s for s in ranked if s.relevance < min_score]
            below.sort(key=lambda s: s.place.rating_value, reverse=True)
            backfill = [
                s.model_copy(update={"backfilled": True})
                for s in below[:max_results - len(selected)]
            ]
            if backfill:
                BACKFILLED_PLACES_TOTAL.inc(len(backfill))
            selected.extend(backfill)

        return selected

    async def _fetch_candidates(
        self,
        city: str,
        query: str,
        categories: Optional[list[str]],
    ) -> list[Place]:
        try:
            return await self.place_search.search(
                city=city,
                query=query or None,
                categories=categories,
                limit=self.search_limit,
            )
        except Exception as e:
            logger.error(f"[RankingService] Candidate fetch failed for city={city!r}: {e}")
            raise UpstreamFetchError(str(e) or type(e).__name__, cause=e) from e
