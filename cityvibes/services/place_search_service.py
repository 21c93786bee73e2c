"""Fetch and normalize places from Foursquare, with a short-lived search cache."""
import logging
from typing import Optional

from cityvibes.api.foursquare_client import FoursquareAPIClient, map_to_place
from cityvibes.dao.cache import TTLCache
from cityvibes.models import FoursquareSearchParams, Place

logger = logging.getLogger(__name__)


class PlaceSearchService:
    """Search places in a city and map them to Place models."""

    def __init__(
        self,
        foursquare_client: FoursquareAPIClient,
        cache: Optional[TTLCache] = None,
        default_limit: int = 50,
        timezone: str = "America/Monterrey",
    ):
        """Initialize service.

        Args:
            foursquare_client: Foursquare Places client
            cache: Search result cache; None disables caching
            default_limit: Result limit when the caller gives none
            timezone: Timezone for Place.last_checked
        """
        self.foursquare_client = foursquare_client
        self.cache = cache
        self.default_limit = default_limit
        self.timezone = timezone

    @staticmethod
    def cache_key(city: str, query: Optional[str], categories: Optional[list[str]], limit: int) -> str:
        category_part = ",".join(categories) if categories else "any"
        return f"{city.strip().lower()}-{query or 'all'}-{category_part}-{limit}"

    async def search(
        self,
        city: str,
        query: Optional[str] = None,
        categories: Optional[list[str]] = None,
        limit: Optional[int] = None,
    ) -> list[Place]:
        """Search places near a city.

        Args:
            city: City name, e.g. "Monterrey"
            query: Free-text search terms
            categories: Foursquare category ids to restrict to
            limit: Max results (Foursquare caps at 50)

        Returns:
            Normalized places in provider order

        Raises:
            FoursquareAPIError: If the provider call fails
        """
        limit = limit or self.default_limit
        key = self.cache_key(city, query, categories, limit)

        if self.cache is not None:
            cached = self.cache.get_fresh(key)
            if cached is not None:
                logger.debug(f"[PlaceSearchService] Cache hit for {key}")
                return cached

        raw_places = await self.foursquare_client.search_places(
            FoursquareSearchParams(near=city, query=query, categories=categories, limit=limit)
        )
        places = [map_to_place(raw, city, self.timezone) for raw in raw_places]

        if self.cache is not None and places:
            self.cache.put(key, places)

        logger.info(f"[PlaceSearchService] {len(places)} places for city={city!r} query={query!r}")
        return places

    def cache_stats(self) -> Optional[dict]:
        return self.cache.stats() if self.cache is not None else None

    def purge_expired(self) -> int:
        return self.cache.purge_expired() if self.cache is not None else 0
