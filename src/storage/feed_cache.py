# src/storage/feed_cache.py

"""Single-slot, time-to-live cache for the raw feed document."""

import logging
import threading
import time
from dataclasses import dataclass

from src.config.settings import Settings

logger = logging.getLogger("feed_catalog.cache")


@dataclass(frozen=True)
class FeedCacheEntry:
    """The most recently downloaded feed text and when it was fetched."""

    fetched_at: float
    raw_text: str

    def age(self, now: float) -> float:
        return now - self.fetched_at


class FeedCache:
    """Holds at most one feed document under a fixed key.

    The service serves one logical feed, so a new download replaces the
    previous entry wholesale. Stale entries are never evicted; they are
    ignored by :meth:`lookup` until the next :meth:`store` overwrites
    them. The TTL is supplied per lookup because it comes from the
    deployment settings read on each request.
    """

    def __init__(self, key: str = Settings.FEED_CACHE_KEY) -> None:
        self.key = key
        self._slot: dict[str, FeedCacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def entry(self) -> FeedCacheEntry | None:
        with self._lock:
            return self._slot.get(self.key)

    def lookup(self, ttl_seconds: float) -> str | None:
        """Return the cached text if it is younger than *ttl_seconds*."""
        entry = self.entry
        if entry is None:
            logger.debug("Feed cache empty")
            return None

        age = entry.age(time.time())
        if age >= ttl_seconds:
            logger.debug(
                "Feed cache stale (age=%.1fs, ttl=%.0fs)",
                age,
                ttl_seconds,
            )
            return None

        logger.info(
            "Feed cache hit (age=%.1fs, ttl=%.0fs)", age, ttl_seconds
        )
        return entry.raw_text

    def store(self, raw_text: str) -> FeedCacheEntry:
        """Replace the cached document with *raw_text*, stamped now."""
        entry = FeedCacheEntry(fetched_at=time.time(), raw_text=raw_text)
        with self._lock:
            self._slot[self.key] = entry
        logger.info("Cached feed document (%d chars)", len(raw_text))
        return entry

    def clear(self) -> bool:
        """Drop the cached document; return True if one was present."""
        with self._lock:
            removed = self._slot.pop(self.key, None)
        logger.info("Feed cache manually purged")
        return removed is not None
