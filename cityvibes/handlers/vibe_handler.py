"""Vibe handler for HTTP requests."""
import logging
from typing import Optional

from cityvibes.api.foursquare_client import FoursquareAPIError
from cityvibes.errors import InputError
from cityvibes.models import (
    ExplainRequest,
    ExplainResponse,
    FeedbackRequest,
    FeedbackResponse,
    Place,
    RankRequest,
    RankResponse,
)
from cityvibes.services import ExplanationService, PlaceSearchService, RankingService
from cityvibes.metrics import FEEDBACK_TOTAL

logger = logging.getLogger(__name__)


class VibeHandler:
    """Handler for ranking, search, explanation and feedback requests."""

    def __init__(
        self,
        ranking_service: RankingService,
        place_search: PlaceSearchService,
        explanation_service: ExplanationService,
        explain_top_result: bool = True,
    ):
        """Initialize vibe handler.

        Args:
            ranking_service: Mood ranking pipeline
            place_search: Raw places search (no ranking)
            explanation_service: Explanation generator
            explain_top_result: Attach an explanation for the first ranked place
        """
        self.ranking_service = ranking_service
        self.place_search = place_search
        self.explanation_service = explanation_service
        self.explain_top_result = explain_top_result

    async def rank(self, request: RankRequest) -> RankResponse:
        """Rank places for a mood in a city.

        Raises:
            InputError: If mood or city is blank
        """
        logger.info(f"[VibeHandler] Rank: mood={request.mood!r}, city={request.city!r}, debug={request.debug}")

        result = await self.ranking_service.rank(request.mood, request.city)

        explanation = None
        if result.places and self.explain_top_result:
            explanation = await self.explanation_service.explain(result.places[0], request.mood)

        return RankResponse(
            places=result.places,
            total=result.total,
            explanation=explanation,
            message=result.message,
            fallback=result.fallback,
            debug=result.trace if request.debug else None,
        )

    async def search_places(
        self,
        city: Optional[str],
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Place]:
        """Unranked places search. Provider failures return an empty list.

        Raises:
            InputError: If city is blank
        """
        if not city or not city.strip():
            raise InputError("city")

        logger.info(f"[VibeHandler] Search places: city={city!r}, query={query!r}, limit={limit}")
        try:
            return await self.place_search.search(city=city.strip(), query=query or None, limit=limit)
        except FoursquareAPIError as e:
            logger.error(f"[VibeHandler] Places search failed for city={city!r}: {e}")
            return []

    async def explain(self, request: ExplainRequest) -> ExplainResponse:
        if not request.mood.strip():
            raise InputError("mood")
        explanation = await self.explanation_service.explain(request.place, request.mood)
        return ExplainResponse(explanation=explanation)

    def feedback(self, request: FeedbackRequest) -> FeedbackResponse:
        """Record feedback on a recommendation (metrics + log only)."""
        logger.info(
            f"[VibeHandler] Feedback: place={request.place_name!r}, "
            f"mood={request.mood!r}, feedback={request.feedback}"
        )
        FEEDBACK_TOTAL.labels(feedback=request.feedback).inc()
        return FeedbackResponse(success=True, message="Feedback recorded successfully")

    def ping(self) -> dict[str, str]:
        """Health check endpoint.

        Returns:
            {"status": "pong"}
        """
        logger.debug("[VibeHandler] Ping")
        return {"status": "pong"}
