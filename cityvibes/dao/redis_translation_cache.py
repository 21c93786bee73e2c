"""Redis-backed translation cache shared across server instances."""
import json
import logging
import time
from typing import Callable, Optional

import redis

from cityvibes.db.redis_client import RedisClient
from cityvibes.models import CacheEntry, Translation
from cityvibes.metrics import CACHE_LOOKUPS_TOTAL

logger = logging.getLogger(__name__)

TRANSLATION_KEY_FORMAT = "translation_v1:{}"
TRANSLATION_KEY_PATTERN = "translation_v1:*"


class RedisTranslationCache:
    """Translation cache stored as JSON strings with a Redis TTL.

    Same get/put/is_expired interface as TTLCache. Redis evicts expired keys
    on its own, so purge_expired is a no-op.
    """

    name = "translation"

    def __init__(
        self,
        client: RedisClient,
        ttl_seconds: int = 300,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[CacheEntry]:
        """Load a cached translation.

        Args:
            key: Normalized phrase

        Returns:
            CacheEntry holding a Translation, or None if absent or unreadable
        """
        try:
            raw = self.client.get(TRANSLATION_KEY_FORMAT.format(key))
        except redis.RedisError as e:
            logger.error(f"[RedisTranslationCache] Read failed for {key!r}: {e}")
            return None

        if raw is None:
            return None

        try:
            payload = json.loads(raw)
            return CacheEntry(
                value=Translation.model_validate(payload["value"]),
                stored_at=float(payload["stored_at"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[RedisTranslationCache] Dropping corrupt entry {key!r}: {e}")
            return None

    def put(self, key: str, value: Translation) -> None:
        payload = {
            "value": value.model_dump(mode="json"),
            "stored_at": self._clock(),
        }
        try:
            self.client.setex(
                TRANSLATION_KEY_FORMAT.format(key),
                int(self.ttl_seconds),
                json.dumps(payload, ensure_ascii=False),
            )
        except redis.RedisError as e:
            logger.error(f"[RedisTranslationCache] Write failed for {key!r}: {e}")

    def is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at >= self.ttl_seconds

    def get_fresh(self, key: str) -> Optional[Translation]:
        entry = self.get(key)
        if entry is None or self.is_expired(entry):
            self.misses += 1
            CACHE_LOOKUPS_TOTAL.labels(cache=self.name, result="miss").inc()
            return None

        self.hits += 1
        CACHE_LOOKUPS_TOTAL.labels(cache=self.name, result="hit").inc()
        return entry.value

    def purge_expired(self) -> int:
        return 0

    def clear(self) -> None:
        try:
            keys = self.client.keys(TRANSLATION_KEY_PATTERN)
            self.client.del_(*keys)
        except redis.RedisError as e:
            logger.error(f"[RedisTranslationCache] Clear failed: {e}")

    def stats(self) -> dict:
        try:
            keys = [k.split(":", 1)[1] for k in self.client.keys(TRANSLATION_KEY_PATTERN)]
        except redis.RedisError as e:
            logger.error(f"[RedisTranslationCache] Could not list keys: {e}")
            keys = []
        return {
            "name": self.name,
            "backend": "redis",
            "size": len(keys),
            "ttl_seconds": self.ttl_seconds,
            "hits": self.hits,
            "misses": self.misses,
            "keys": keys,
        }
