"""End-to-end tests of the assembled app without external services."""
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(monkeypatch):
    """Run the app lifespan with no Foursquare/OpenAI keys and an in-memory cache."""
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.setenv("FOURSQUARE_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("TRANSLATION_CACHE_BACKEND", "memory")

    import main

    with TestClient(main.app) as test_client:
        yield test_client


class TestApp:
    """Test startup wiring and the public routes."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ping(self, client):
        assert client.get("/ping").json() == {"status": "pong"}

    def test_metrics(self, client):
        client.get("/ping")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text

    def test_rank_missing_mood(self, client):
        response = client.post("/v1/rank", json={"city": "Monterrey"})

        assert response.status_code == 400
        assert response.json()["detail"] == "missing required field: mood"

    def test_rank_without_provider_key_falls_back(self, client):
        """Missing Foursquare key is an upstream failure, not a server error."""
        response = client.post("/v1/rank", json={"mood": "bellakeo", "city": "Monterrey", "debug": True})

        body = response.json()
        assert response.status_code == 200
        assert body["places"] == []
        assert body["total"] == 0
        assert body["fallback"] is True
        assert body["debug"]["stage"] == "failed"
        assert body["debug"]["translation"]["source"] == "dictionary"

    def test_places_without_provider_key(self, client):
        response = client.get("/v1/places", params={"city": "Monterrey"})

        assert response.status_code == 200
        assert response.json() == []

    def test_explain_template(self, client):
        response = client.post(
            "/v1/explain",
            json={"mood": "chill", "place": {"name": "Café Luna", "category": "café"}},
        )

        assert response.json() == {"explanation": "Café Luna es perfecto para tu vibra chill 🔥"}

    def test_feedback(self, client):
        response = client.post(
            "/v1/feedback",
            json={"mood": "chill", "place_name": "Café Luna", "feedback": "🔥"},
        )

        assert response.json() == {"success": True, "message": "Feedback recorded successfully"}
