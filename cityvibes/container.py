"""Dependency injection container for application components."""
import logging

from cityvibes.config import Settings
from cityvibes.api import FoursquareAPIClient, OpenAICompletionClient
from cityvibes.dao import RedisTranslationCache, TTLCache
from cityvibes.db import RedisClient
from cityvibes.services import (
    ExplanationService,
    PlaceSearchService,
    RankingService,
    SemanticTranslator,
)
from cityvibes.handlers import VibeHandler

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container.

    Initializes and wires up all application dependencies.
    """

    def __init__(self, settings: Settings):
        """Initialize container with all dependencies.

        Args:
            settings: Application settings
        """
        logger.info("[Container] Initializing container")
        self.settings = settings

        # Foursquare Places client (required for ranking; calls fail fast without a key)
        self.foursquare_api = FoursquareAPIClient(
            api_key=settings.foursquare_api_key,
            base_url=settings.foursquare_base_url,
            timeout=settings.foursquare_timeout_seconds,
        )
        if not settings.foursquare_enabled:
            logger.warning(
                "[Container] Foursquare API key not configured. "
                "Ranking will return empty fallback results."
            )

        # OpenAI client (translation fallback + explanations)
        self.openai_client = None
        if settings.openai_enabled:
            self.openai_client = OpenAICompletionClient(
                api_key=settings.openai_api_key,
                model=settings.translation_model,
                timeout=settings.openai_timeout_seconds,
            )
            logger.info("[Container] OpenAI completion client initialized")
        else:
            logger.info(
                "[Container] LLM translation and explanations disabled "
                "(missing OpenAI API key)"
            )

        # Translation cache
        self.redis_client = None
        if settings.translation_cache_backend == "redis":
            logger.info(f"[Container] Connecting to Redis at {settings.redis_address}")
            self.redis_client = RedisClient.from_settings(
                host=settings.redis_host,
                port=settings.redis_port,
                password=settings.redis_password,
                db=settings.redis_db,
            )
            self.translation_cache = RedisTranslationCache(
                self.redis_client,
                ttl_seconds=settings.translation_cache_ttl_seconds,
            )
        else:
            self.translation_cache = TTLCache(
                "translation",
                ttl_seconds=settings.translation_cache_ttl_seconds,
            )
        logger.info(
            f"[Container] Translation cache: {settings.translation_cache_backend} "
            f"(ttl={settings.translation_cache_ttl_seconds}s)"
        )

        # Places search cache
        self.places_cache = None
        if settings.places_cache_ttl_seconds > 0:
            self.places_cache = TTLCache("places", ttl_seconds=settings.places_cache_ttl_seconds)

        # Initialize services
        self.translator = SemanticTranslator(
            cache=self.translation_cache,
            completion_provider=self.openai_client,
            min_confidence=settings.translation_min_confidence,
            llm_confidence_cap=settings.translation_llm_confidence_cap,
        )
        self.place_search_service = PlaceSearchService(
            self.foursquare_api,
            cache=self.places_cache,
            default_limit=settings.foursquare_search_limit,
            timezone=settings.timezone,
        )
        self.ranking_service = RankingService(
            self.place_search_service,
            self.translator,
            min_score=settings.ranking_min_score,
            max_results=settings.ranking_max_results,
            validation_fallback_limit=settings.validation_fallback_limit,
            search_limit=settings.foursquare_search_limit,
            min_translation_confidence=settings.translation_min_confidence,
        )
        self.explanation_service = ExplanationService(
            completion_provider=self.openai_client,
            model=settings.explanation_model,
            enabled=settings.explanations_enabled,
        )

        # Initialize handlers
        self.vibe_handler = VibeHandler(
            self.ranking_service,
            self.place_search_service,
            self.explanation_service,
        )

        logger.info("[Container] Container initialized successfully")

    def purge_expired_caches(self) -> int:
        """Drop expired entries from every in-memory cache."""
        removed = self.translation_cache.purge_expired()
        if self.places_cache is not None:
            removed += self.places_cache.purge_expired()
        return removed

    async def shutdown(self):
        """Clean up resources on shutdown."""
        logger.info("[Container] Shutting down container")
        try:
            await self.foursquare_api.close()
            logger.info("[Container] Foursquare API client closed")
        except Exception as e:
            logger.error(f"[Container] Error closing Foursquare API client: {e}")

        if self.openai_client:
            try:
                await self.openai_client.close()
                logger.info("[Container] OpenAI client closed")
            except Exception as e:
                logger.error(f"[Container] Error closing OpenAI client: {e}")

        if self.redis_client:
            try:
                self.redis_client.close()
                logger.info("[Container] Redis client closed")
            except Exception as e:
                logger.error(f"[Container] Error closing Redis client: {e}")

        logger.info("[Container] Container shutdown complete")
