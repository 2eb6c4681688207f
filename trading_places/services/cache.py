"""
In-memory cache with a fixed time-to-live.

Entries are stamped on ``set`` and checked on every ``get``; stale entries are
removed lazily on read, there is no background sweep. Capacity is unbounded.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    timestamp: float


class CacheService:
    DEFAULT_TTL_SECONDS = 60 * 60  # 1 hour

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = float(ttl_seconds if ttl_seconds is not None else self.DEFAULT_TTL_SECONDS)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if self._clock() - entry.timestamp > self.ttl_seconds:
            del self._entries[key]
            self._misses += 1
            logger.debug("Cache entry expired: %s", key)
            return None

        self._hits += 1
        return entry.value

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cache cleared (%s entries removed)", count)

    def __contains__(self, key: str) -> bool:
        # Raw membership, ignores expiry.
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        lookups = self._hits + self._misses
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / lookups * 100, 2) if lookups else 0,
            "ttl_seconds": self.ttl_seconds,
        }

    def stats(self) -> Dict[str, Any]:
        return self.get_stats()
