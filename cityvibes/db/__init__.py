"""Database clients package."""
from cityvibes.db.redis_client import RedisClient

__all__ = ["RedisClient"]
