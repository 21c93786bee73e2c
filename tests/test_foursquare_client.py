"""Unit tests for the Foursquare Places client."""
import pytest
from unittest.mock import AsyncMock, patch

import httpx

from cityvibes.api.foursquare_client import (
    FoursquareAPIClient,
    FoursquareAPIError,
    map_to_place,
    to_five_star,
)
from cityvibes.models import FoursquarePlace, FoursquareSearchParams

SEARCH_URL = "https://api.foursquare.com/v3/places/search"


def make_response(status_code: int, json_body=None, content: bytes = None) -> httpx.Response:
    request = httpx.Request("GET", SEARCH_URL)
    if json_body is not None:
        return httpx.Response(status_code, json=json_body, request=request)
    return httpx.Response(status_code, content=content or b"", request=request)


@pytest.fixture
def api_client():
    """Create Foursquare client with a fake key."""
    return FoursquareAPIClient(api_key="fsq3-test-key")


@pytest.fixture
def search_params():
    return FoursquareSearchParams(near="Monterrey", query="nightclub", categories=["13002"], limit=50)


@pytest.fixture
def raw_place():
    return FoursquarePlace.model_validate({
        "fsq_id": "4b5a",
        "name": "Club Norte",
        "categories": [{"id": 10032, "name": "Night Club"}, {"id": 13003, "name": "Bar"}],
        "location": {"address": "Av. Constitución 100", "formatted_address": "Av. Constitución 100, Monterrey"},
        "geocodes": {"main": {"latitude": 25.67, "longitude": -100.31}},
        "rating": 8.7,
        "price": 2,
        "hours": {"display": "Thu-Sat 22:00-4:00"},
        "contact": {"tel": "+52 81 1234 5678", "website": "https://clubnorte.mx"},
        "features": {"Music": {}, "Dance Floor": True},
        "photos": [{"id": "p1", "prefix": "https://fastly.4sqi.net/img/general/", "suffix": "/abc.jpg"}],
        "tips": [{"text": "Buen perreo"}, {"text": ""}, {"text": "Llega temprano"}, {"text": "DJ"}, {"text": "x"}],
    })


class TestSearchPlaces:
    """Test search_places request handling."""

    @pytest.mark.asyncio
    async def test_success(self, api_client, search_params):
        """Results are parsed into FoursquarePlace models."""
        body = {"results": [{"fsq_id": "1", "name": "Club Norte", "rating": 9.1}]}

        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_response(200, json_body=body)

            results = await api_client.search_places(search_params)

        assert len(results) == 1
        assert results[0].name == "Club Norte"
        assert results[0].rating == 9.1

        call = mock_get.call_args
        assert call.args[0] == SEARCH_URL
        assert call.kwargs["headers"]["Authorization"] == "fsq3-test-key"
        assert call.kwargs["params"]["near"] == "Monterrey"
        assert call.kwargs["params"]["categories"] == "13002"
        assert "fields" in call.kwargs["params"]

    @pytest.mark.asyncio
    async def test_empty_results(self, api_client, search_params):
        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_response(200, json_body={"results": []})

            results = await api_client.search_places(search_params)

        assert results == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 429, 500])
    async def test_http_error(self, api_client, search_params, status_code):
        """Non-2xx responses raise FoursquareAPIError with the status code."""
        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_response(status_code, json_body={"message": "nope"})

            with pytest.raises(FoursquareAPIError) as exc_info:
                await api_client.search_places(search_params)

        assert exc_info.value.status_code == status_code

    @pytest.mark.asyncio
    async def test_timeout(self, api_client, search_params):
        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.ReadTimeout("timed out")

            with pytest.raises(FoursquareAPIError, match="timeout"):
                await api_client.search_places(search_params)

    @pytest.mark.asyncio
    async def test_connection_error(self, api_client, search_params):
        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.ConnectError("refused")

            with pytest.raises(FoursquareAPIError, match="unreachable"):
                await api_client.search_places(search_params)

    @pytest.mark.asyncio
    async def test_invalid_json(self, api_client, search_params):
        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_response(200, content=b"<html>oops</html>")

            with pytest.raises(FoursquareAPIError, match="invalid JSON"):
                await api_client.search_places(search_params)

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_request(self, search_params):
        """Without a key no HTTP request is attempted."""
        api_client = FoursquareAPIClient(api_key="")

        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            with pytest.raises(FoursquareAPIError, match="not configured"):
                await api_client.search_places(search_params)

        mock_get.assert_not_awaited()
        assert api_client.is_available() is False

    @pytest.mark.asyncio
    async def test_connection_check(self, api_client):
        with patch.object(api_client.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = make_response(200, json_body={"results": []})
            assert await api_client.test_connection() is True

            mock_get.return_value = make_response(500, json_body={})
            assert await api_client.test_connection() is False


class TestSearchParams:
    """Test query parameter building."""

    def test_optional_fields_omitted(self):
        params = FoursquareSearchParams(near="Monterrey").to_query_params()
        assert params == {"near": "Monterrey", "limit": 50}

    def test_limit_capped_and_categories_joined(self):
        params = FoursquareSearchParams(
            near="Monterrey",
            query="cafe",
            categories=["13032", "13065"],
            limit=80,
        ).to_query_params("name")

        assert params["limit"] == 50
        assert params["categories"] == "13032,13065"
        assert params["fields"] == "name"


class TestMapToPlace:
    """Test Foursquare to Place normalization."""

    def test_full_mapping(self, raw_place):
        place = map_to_place(raw_place, "Monterrey")

        assert place.name == "Club Norte"
        assert place.category == "antro"
        assert place.city == "Monterrey"
        assert place.address == "Av. Constitución 100, Monterrey"
        assert place.lat == 25.67
        assert place.lng == -100.31
        assert place.phone == "+52 81 1234 5678"
        assert place.website == "https://clubnorte.mx"
        assert place.rating == "4.3"
        assert place.price_level == "$$"
        assert place.opening_hours == "Thu-Sat 22:00-4:00"
        assert place.tags == ["night club", "bar", "antro", "music", "dance floor"]
        assert place.review_snippets == ["Buen perreo", "Llega temprano", "DJ"]
        assert place.media == ["https://fastly.4sqi.net/img/general/300x300/abc.jpg"]
        assert len(place.last_checked) == 10

    def test_minimal_place_defaults(self):
        place = map_to_place(FoursquarePlace(name="Sin Datos"), "Monterrey")

        assert place.category == "general"
        assert place.rating == "0"
        assert place.price_level == "$"
        assert place.opening_hours == "Hours not available"
        assert place.address == ""
        assert place.tags == []
        assert place.media == []

    def test_unknown_category_kept_lower_case(self):
        raw = FoursquarePlace.model_validate({
            "name": "Boliche",
            "categories": [{"id": 1, "name": "Bowling Alley"}],
        })

        place = map_to_place(raw, "Monterrey")

        assert place.category == "bowling alley"

    @pytest.mark.parametrize("rating,expected", [
        (None, "0"),
        (10.0, "5.0"),
        (9.0, "4.5"),
        (7.3, "3.6"),
    ])
    def test_to_five_star(self, rating, expected):
        assert to_five_star(rating) == expected
