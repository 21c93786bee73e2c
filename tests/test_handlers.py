"""Unit tests for handlers."""
import pytest
from unittest.mock import AsyncMock, Mock

from cityvibes.api.foursquare_client import FoursquareAPIError
from cityvibes.errors import InputError
from cityvibes.handlers import VibeHandler
from cityvibes.models import (
    ExplainRequest,
    FeedbackRequest,
    Place,
    RankingStage,
    RankRequest,
    RankResult,
    RankTrace,
)


@pytest.fixture
def club_norte():
    return Place(name="Club Norte", category="antro", city="Monterrey", rating="4.8")


@pytest.fixture
def mock_ranking_service():
    """Create mock ranking service."""
    service = Mock()
    service.rank = AsyncMock()
    return service


@pytest.fixture
def mock_place_search():
    service = Mock()
    service.search = AsyncMock(return_value=[])
    return service


@pytest.fixture
def mock_explanation_service():
    service = Mock()
    service.explain = AsyncMock(return_value="Club Norte es perfecto para tu vibra bellakeo 🔥")
    return service


@pytest.fixture
def vibe_handler(mock_ranking_service, mock_place_search, mock_explanation_service):
    """Create VibeHandler with mocked services."""
    return VibeHandler(mock_ranking_service, mock_place_search, mock_explanation_service)


class TestVibeHandlerRank:
    """Test VibeHandler.rank response building."""

    @pytest.mark.asyncio
    async def test_rank_explains_top_place(
        self, vibe_handler, mock_ranking_service, mock_explanation_service, club_norte
    ):
        """The first ranked place gets an explanation."""
        mock_ranking_service.rank.return_value = RankResult(places=[club_norte])

        response = await vibe_handler.rank(RankRequest(mood="bellakeo", city="Monterrey"))

        assert response.places == [club_norte]
        assert response.total == 1
        assert response.explanation.startswith("Club Norte")
        assert response.fallback is False
        assert response.debug is None
        mock_ranking_service.rank.assert_awaited_once_with("bellakeo", "Monterrey")
        mock_explanation_service.explain.assert_awaited_once_with(club_norte, "bellakeo")

    @pytest.mark.asyncio
    async def test_rank_without_places_skips_explanation(
        self, vibe_handler, mock_ranking_service, mock_explanation_service
    ):
        mock_ranking_service.rank.return_value = RankResult(
            places=[], message="No places found for this vibe", fallback=True
        )

        response = await vibe_handler.rank(RankRequest(mood="bellakeo", city="Monterrey"))

        assert response.total == 0
        assert response.fallback is True
        assert response.message == "No places found for this vibe"
        assert response.explanation is None
        mock_explanation_service.explain.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_debug_includes_trace(self, vibe_handler, mock_ranking_service, club_norte):
        trace = RankTrace(stage=RankingStage.FINALIZED, primary_vibe="bellakeo")
        mock_ranking_service.rank.return_value = RankResult(places=[club_norte], trace=trace)

        response = await vibe_handler.rank(RankRequest(mood="bellakeo", city="Monterrey", debug=True))

        assert response.debug == trace

    @pytest.mark.asyncio
    async def test_rank_propagates_input_error(self, vibe_handler, mock_ranking_service):
        mock_ranking_service.rank.side_effect = InputError("mood")

        with pytest.raises(InputError):
            await vibe_handler.rank(RankRequest(mood="", city="Monterrey"))

    @pytest.mark.asyncio
    async def test_mood_list_is_joined(self, vibe_handler, mock_ranking_service):
        mock_ranking_service.rank.return_value = RankResult()

        await vibe_handler.rank(RankRequest(mood=["chill", "cozy"], city="Monterrey"))

        mock_ranking_service.rank.assert_awaited_once_with("chill cozy", "Monterrey")


class TestVibeHandlerSearch:
    """Test unranked places search."""

    @pytest.mark.asyncio
    async def test_search_delegates(self, vibe_handler, mock_place_search, club_norte):
        mock_place_search.search.return_value = [club_norte]

        places = await vibe_handler.search_places(" Monterrey ", "antro", 10)

        assert places == [club_norte]
        mock_place_search.search.assert_awaited_once_with(city="Monterrey", query="antro", limit=10)

    @pytest.mark.asyncio
    async def test_search_requires_city(self, vibe_handler, mock_place_search):
        with pytest.raises(InputError):
            await vibe_handler.search_places("  ")
        mock_place_search.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_error_returns_empty(self, vibe_handler, mock_place_search):
        mock_place_search.search.side_effect = FoursquareAPIError("Foursquare API error: 500", status_code=500)

        assert await vibe_handler.search_places("Monterrey") == []


class TestVibeHandlerMisc:
    """Test explain, feedback and ping."""

    @pytest.mark.asyncio
    async def test_explain(self, vibe_handler, mock_explanation_service, club_norte):
        response = await vibe_handler.explain(ExplainRequest(mood="bellakeo", place=club_norte))

        assert response.explanation.startswith("Club Norte")
        mock_explanation_service.explain.assert_awaited_once_with(club_norte, "bellakeo")

    @pytest.mark.asyncio
    async def test_explain_requires_mood(self, vibe_handler, club_norte):
        with pytest.raises(InputError):
            await vibe_handler.explain(ExplainRequest(mood=" ", place=club_norte))

    def test_feedback(self, vibe_handler):
        response = vibe_handler.feedback(
            FeedbackRequest(mood="bellakeo", place_name="Club Norte", feedback="🔥")
        )

        assert response.success is True
        assert response.message == "Feedback recorded successfully"

    def test_ping(self, vibe_handler):
        """Test ping health check."""
        assert vibe_handler.ping() == {"status": "pong"}
