"""Cache access package."""
from cityvibes.dao.cache import TTLCache
from cityvibes.dao.redis_translation_cache import RedisTranslationCache

__all__ = ["TTLCache", "RedisTranslationCache"]
