"""Tests for HTTP routes with a mocked handler."""
import pytest
from unittest.mock import AsyncMock, Mock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from cityvibes.dao.cache import TTLCache
from cityvibes.errors import InputError
from cityvibes.models import FeedbackResponse, Place, RankResponse
from cityvibes.routers import debug_router, set_debug_dependencies, set_vibe_handler, vibe_router
from cityvibes.services.semantic_translator import SemanticTranslator


@pytest.fixture
def mock_handler():
    handler = Mock()
    handler.rank = AsyncMock()
    handler.search_places = AsyncMock(return_value=[])
    handler.explain = AsyncMock()
    handler.ping.return_value = {"status": "pong"}
    return handler


@pytest.fixture
def client(mock_handler):
    """App with both routers and the mocked handler injected."""
    app = FastAPI()
    app.include_router(vibe_router)
    app.include_router(debug_router)
    set_vibe_handler(mock_handler)
    set_debug_dependencies(SemanticTranslator(cache=TTLCache("translation", ttl_seconds=300)))
    yield TestClient(app)
    set_vibe_handler(None)
    set_debug_dependencies(None)


class TestVibeRoutes:
    """Test /v1 routes."""

    def test_rank(self, client, mock_handler):
        mock_handler.rank.return_value = RankResponse(
            places=[Place(name="Club Norte", category="antro")],
            total=1,
            explanation="Club Norte es perfecto para tu vibra bellakeo 🔥",
        )

        response = client.post("/v1/rank", json={"mood": "bellakeo", "city": "Monterrey"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["places"][0]["name"] == "Club Norte"
        assert "debug" not in body
        request = mock_handler.rank.call_args.args[0]
        assert request.mood == "bellakeo"
        assert request.city == "Monterrey"

    def test_rank_input_error_is_400(self, client, mock_handler):
        mock_handler.rank.side_effect = InputError("mood")

        response = client.post("/v1/rank", json={"city": "Monterrey"})

        assert response.status_code == 400
        assert response.json()["detail"] == "missing required field: mood"

    def test_rank_unexpected_error_is_500(self, client, mock_handler):
        mock_handler.rank.side_effect = RuntimeError("boom")

        response = client.post("/v1/rank", json={"mood": "bellakeo", "city": "Monterrey"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"

    def test_places(self, client, mock_handler):
        mock_handler.search_places.return_value = [Place(name="Café Luna", category="café")]

        response = client.get("/v1/places", params={"city": "Monterrey", "query": "cafe"})

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Café Luna"
        mock_handler.search_places.assert_awaited_once_with("Monterrey", "cafe", 20)

    def test_places_limit_validated(self, client):
        response = client.get("/v1/places", params={"city": "Monterrey", "limit": 100})
        assert response.status_code == 422

    def test_feedback_emoji(self, client, mock_handler):
        mock_handler.feedback.return_value = FeedbackResponse(message="Feedback recorded successfully")

        response = client.post(
            "/v1/feedback",
            json={"mood": "bellakeo", "place_name": "Club Norte", "feedback": "❌"},
        )

        assert response.status_code == 200
        assert mock_handler.feedback.call_args.args[0].feedback == "skip"

    def test_feedback_invalid_value(self, client):
        response = client.post(
            "/v1/feedback",
            json={"mood": "bellakeo", "place_name": "Club Norte", "feedback": "meh"},
        )
        assert response.status_code == 422

    def test_ping(self, client):
        assert client.get("/ping").json() == {"status": "pong"}

    def test_not_ready_is_503(self, client):
        set_vibe_handler(None)

        response = client.post("/v1/rank", json={"mood": "bellakeo", "city": "Monterrey"})

        assert response.status_code == 503


class TestDebugRoutes:
    """Test /debug routes."""

    def test_tokenize(self, client):
        response = client.get("/debug/tokenize", params={"mood": "bellakeo"})

        body = response.json()
        assert response.status_code == 200
        assert body["tokens"][0] == "bellakeo"
        assert body["mood_group"] == "nightlife"
        assert body["primary_vibe"] == "bellakeo"
        assert body["query"] == "reggaeton urban nightclub"

    def test_translate(self, client):
        response = client.get("/debug/translate", params={"phrase": "mariscos"})

        body = response.json()
        assert body["translated_query"] == "seafood restaurant"
        assert body["source"] == "dictionary"

    def test_vibes(self, client):
        vibes = [v["vibe"] for v in client.get("/debug/vibes").json()]
        assert vibes[0] == "bellakeo"
        assert "chill" in vibes

    def test_cache_stats_and_purge(self, client):
        client.get("/debug/translate", params={"phrase": "chill"})

        stats = client.get("/debug/cache").json()
        assert stats["translation"]["size"] == 1
        assert stats["places"] is None

        assert client.post("/debug/cache/purge").json() == {"translation": 0, "places": 0}

    def test_foursquare_status_unconfigured(self, client):
        body = client.get("/debug/foursquare/status").json()
        assert body["configured"] is False
        assert body["connected"] is False
