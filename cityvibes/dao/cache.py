"""In-memory TTL cache used for translations and places searches."""
import logging
import time
from typing import Any, Callable, Optional

from cityvibes.models import CacheEntry
from cityvibes.metrics import CACHE_LOOKUPS_TOTAL, CACHE_ENTRIES

logger = logging.getLogger(__name__)


class TTLCache:
    """Dict-backed cache whose entries expire ttl_seconds after they were stored.

    Expired entries stay in memory until they are read or purged. Writes are
    last-writer-wins; no locking is needed under a single asyncio loop.
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize cache.

        Args:
            name: Label used in logs and metrics (e.g. "translation", "places")
            ttl_seconds: Entry lifetime in seconds
            clock: Returns current epoch seconds (injectable for tests)
        """
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the stored entry (expired or not), or None."""
        return self._entries.get(key)

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        CACHE_ENTRIES.labels(cache=self.name).set(len(self._entries))

    def is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at >= self.ttl_seconds

    def get_fresh(self, key: str) -> Optional[Any]:
        """Return the cached value if present and unexpired, evicting it otherwise."""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            CACHE_LOOKUPS_TOTAL.labels(cache=self.name, result="miss").inc()
            return None

        if self.is_expired(entry):
            del self._entries[key]
            self.misses += 1
            CACHE_LOOKUPS_TOTAL.labels(cache=self.name, result="expired").inc()
            CACHE_ENTRIES.labels(cache=self.name).set(len(self._entries))
            return None

        self.hits += 1
        CACHE_LOOKUPS_TOTAL.labels(cache=self.name, result="hit").inc()
        return entry.value

    def purge_expired(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries removed
        """
        expired = [key for key, entry in self._entries.items() if self.is_expired(entry)]
        for key in expired:
            del self._entries[key]

        CACHE_ENTRIES.labels(cache=self.name).set(len(self._entries))
        if expired:
            logger.info(f"[TTLCache:{self.name}] Purged {len(expired)} expired entries")
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
        CACHE_ENTRIES.labels(cache=self.name).set(0)

    def stats(self) -> dict:
        return {
            "name": self.name,
            "backend": "memory",
            "size": len(self._entries),
            "ttl_seconds": self.ttl_seconds,
            "hits": self.hits,
            "misses": self.misses,
            "keys": list(self._entries.keys()),
        }

    def __len__(self) -> int:
        return len(self._entries)
