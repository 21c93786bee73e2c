"""Foursquare Places API (v3) client with async HTTP support."""
import logging
import time
from datetime import datetime
from typing import Optional

import httpx
import pytz

from cityvibes.models import FoursquarePlace, FoursquareSearchParams, FoursquareSearchResponse, Place
from cityvibes.models.lexicon import DEFAULT_CATEGORY, canonical_category
from cityvibes.metrics import (
    FOURSQUARE_API_CALLS_TOTAL,
    FOURSQUARE_API_CALL_DURATION_SECONDS,
    FOURSQUARE_API_ERRORS_TOTAL,
)

logger = logging.getLogger(__name__)

# Fields requested from /places/search; anything else is billed as premium
SEARCH_FIELDS = ",".join([
    "fsq_id",
    "name",
    "categories",
    "location",
    "geocodes",
    "rating",
    "price",
    "hours",
    "tel",
    "website",
    "features",
    "photos",
    "tips",
])

PRICE_LEVELS = {1: "$", 2: "$$", 3: "$$$", 4: "$$$$"}

PHOTO_SIZE = "300x300"
MAX_REVIEW_SNIPPETS = 3


class FoursquareAPIError(Exception):
    """Raised when a Foursquare call cannot produce a usable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class FoursquareAPIClient:
    """Async HTTP client for the Foursquare Places API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.foursquare.com/v3",
        timeout: float = 8.0,
    ):
        """Initialize Foursquare API client.

        Args:
            api_key: Foursquare service API key (sent as the Authorization header)
            base_url: Base URL for the Places API
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
        )

    async def close(self):
        """Close the HTTP client and clean up resources."""
        await self.client.aclose()

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def _request(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """Make a GET request to the Places API.

        Args:
            endpoint: API endpoint path (e.g. "/places/search")
            params: Query parameters

        Returns:
            JSON response as dict

        Raises:
            FoursquareAPIError: On missing key, non-2xx status, timeout or network failure
        """
        if not self.api_key:
            FOURSQUARE_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="missing_key").inc()
            raise FoursquareAPIError("Foursquare API key not configured")

        url = f"{self.base_url}{endpoint}"
        headers = {
            "Accept": "application/json",
            "Authorization": self.api_key,
        }

        logger.debug(f"[FoursquareAPIClient] GET {url} params={params}")

        start_time = time.perf_counter()

        try:
            response = await self.client.get(url, params=params, headers=headers)

            logger.debug(f"[FoursquareAPIClient] Response status: {response.status_code}")

            response.raise_for_status()
            response_json = response.json()

            duration = time.perf_counter() - start_time
            FOURSQUARE_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            FOURSQUARE_API_CALLS_TOTAL.labels(endpoint=endpoint, status="success").inc()

            return response_json

        except httpx.HTTPStatusError as e:
            duration = time.perf_counter() - start_time
            FOURSQUARE_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            FOURSQUARE_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            FOURSQUARE_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="http_error").inc()

            status_code = e.response.status_code
            if status_code in (401, 403):
                logger.error(f"[FoursquareAPIClient] API key rejected ({status_code}): {e}")
            else:
                logger.error(f"[FoursquareAPIClient] HTTP error on {endpoint}: {e}")
            raise FoursquareAPIError(
                f"Foursquare API error: {status_code}", status_code=status_code
            ) from e

        except httpx.TimeoutException as e:
            duration = time.perf_counter() - start_time
            FOURSQUARE_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            FOURSQUARE_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            FOURSQUARE_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="timeout").inc()
            logger.error(f"[FoursquareAPIClient] Timeout on {endpoint}: {e}")
            raise FoursquareAPIError(f"Foursquare API timeout after {self.timeout}s") from e

        except httpx.RequestError as e:
            duration = time.perf_counter() - start_time
            FOURSQUARE_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            FOURSQUARE_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            FOURSQUARE_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="connection_error").inc()
            logger.error(f"[FoursquareAPIClient] Request error on {endpoint}: {e}")
            raise FoursquareAPIError(f"Foursquare API unreachable: {e}") from e

        except ValueError as e:
            FOURSQUARE_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            FOURSQUARE_API_ERRORS_TOTAL.labels(endpoint=endpoint, error_type="invalid_json").inc()
            logger.error(f"[FoursquareAPIClient] Invalid JSON from {endpoint}: {e}")
            raise FoursquareAPIError("Foursquare API returned invalid JSON") from e

    async def search_places(self, params: FoursquareSearchParams) -> list[FoursquarePlace]:
        """Call GET /places/search.

        Args:
            params: Search parameters (city, query, category ids, limit)

        Returns:
            Raw Foursquare places, possibly empty

        Raises:
            FoursquareAPIError: If the request fails or the body is not a search response
        """
        logger.info(
            f"[FoursquareAPIClient] Searching near={params.near!r} "
            f"query={params.query!r} categories={params.categories}"
        )
        data = await self._request("/places/search", params=params.to_query_params(SEARCH_FIELDS))

        try:
            search_response = FoursquareSearchResponse.model_validate(data)
        except ValueError as e:
            logger.error(f"[FoursquareAPIClient] Unexpected search response: {e}")
            raise FoursquareAPIError("Unexpected Foursquare search response") from e

        logger.info(f"[FoursquareAPIClient] Found {len(search_response.results)} places")
        return search_response.results

    async def test_connection(self) -> bool:
        """Run a one-result search to check the key and connectivity."""
        try:
            await self.search_places(
                FoursquareSearchParams(near="Monterrey, NL", query="cafe", limit=1)
            )
            return True
        except FoursquareAPIError as e:
            logger.warning(f"[FoursquareAPIClient] Connection test failed: {e}")
            return False


def to_five_star(rating: Optional[float]) -> str:
    """Foursquare rates 0-10; places carry a 0-5 rating string."""
    if rating is None:
        return "0"
    return str(round(rating / 2, 1))


def map_to_place(raw: FoursquarePlace, city: str, timezone: str = "America/Monterrey") -> Place:
    """Convert a raw Foursquare place into a normalized Place.

    Args:
        raw: Place as returned by /places/search
        city: City the search was run for
        timezone: Timezone used for the last_checked date

    Returns:
        Immutable Place with canonical category and lower-case tags
    """
    category_names = [c.name for c in raw.categories if c.name]
    category = canonical_category(category_names[0]) if category_names else DEFAULT_CATEGORY

    tags = [name.lower() for name in category_names]
    if category != DEFAULT_CATEGORY:
        tags.append(category)
    tags.extend(key.lower() for key in raw.features.keys())

    lat, lng = 0.0, 0.0
    if raw.geocodes and raw.geocodes.main:
        lat = raw.geocodes.main.latitude
        lng = raw.geocodes.main.longitude

    address = ""
    if raw.location:
        address = raw.location.formatted_address or raw.location.address or ""

    opening_hours = "Hours not available"
    if raw.hours and raw.hours.display:
        opening_hours = raw.hours.display

    today = datetime.now(pytz.timezone(timezone)).date().isoformat()

    return Place(
        name=raw.name,
        category=category,
        city=city,
        address=address,
        lat=lat,
        lng=lng,
        phone=raw.phone,
        website=raw.site,
        rating=to_five_star(raw.rating),
        price_level=PRICE_LEVELS.get(raw.price, "$"),
        opening_hours=opening_hours,
        tags=tags,
        review_snippets=[tip.text for tip in raw.tips if tip.text][:MAX_REVIEW_SNIPPETS],
        last_checked=today,
        media=[photo.url(PHOTO_SIZE) for photo in raw.photos],
    )
