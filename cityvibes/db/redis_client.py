"""Thin Redis client wrapper used by the shared translation cache."""
import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


class RedisClient:
    """String key/value access to Redis with TTL support."""

    def __init__(self, client: redis.Redis):
        """Wrap an existing redis connection and verify it responds.

        Args:
            client: redis.Redis / redis.StrictRedis instance (decode_responses=True)

        Raises:
            redis.ConnectionError: If the server cannot be reached
        """
        self.client = client

        try:
            self.ping()
            logger.info("[RedisClient] Connected to Redis")
        except redis.ConnectionError as e:
            logger.error(f"[RedisClient] Could not connect to Redis: {e}")
            raise

    @classmethod
    def from_settings(cls, host: str, port: int, password: str = "", db: int = 0) -> "RedisClient":
        return cls(
            redis.StrictRedis(
                host=host,
                port=port,
                password=password if password else None,
                db=db,
                decode_responses=True,
            )
        )

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Set a key-value pair with expiration.

        Args:
            key: Redis key
            ttl_seconds: Time-to-live in seconds
            value: String value to store
        """
        self.client.setex(key, ttl_seconds, value)

    def keys(self, pattern: str) -> list[str]:
        """Return all keys matching the given pattern (e.g. "translation:*")."""
        return self.client.keys(pattern)

    def del_(self, *keys: str) -> int:
        if not keys:
            return 0
        return self.client.delete(*keys)

    def ping(self) -> bool:
        return self.client.ping()

    def close(self) -> None:
        self.client.close()
