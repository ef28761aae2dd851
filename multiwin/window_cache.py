"""
Compositor Window List Cache

Caches compositor window list queries with a 100ms TTL so that several
layout computations triggered in quick succession (e.g. a held-down
shortcut) share a single query.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .protocol import CompositorWindowInfo, WindowQuery

logger = logging.getLogger(__name__)

CacheKey = Tuple[Optional[Tuple[int, ...]], bool]


class WindowInfoCacheEntry:
    """Cache entry for one window list query.

    Attributes:
        infos: The cached query result
        cached_at: Clock reading when the result was stored
        ttl_ms: Time-to-live in milliseconds
    """

    def __init__(
        self,
        infos: List[CompositorWindowInfo],
        cached_at: float,
        ttl_ms: float = 100.0,
    ):
        self.infos = infos
        self.cached_at = cached_at
        self.ttl_ms = ttl_ms

    def age_ms(self, now: float) -> float:
        """Get entry age in milliseconds."""
        return (now - self.cached_at) * 1000

    def is_expired(self, now: float) -> bool:
        """Check if the entry has outlived its TTL."""
        return self.age_ms(now) > self.ttl_ms


class WindowInfoCache:
    """Time-bounded cache around the compositor window list query.

    Each distinct id filter is cached separately; "no filter" is its own key.
    A failing query is logged and treated as an empty window list.

    Example:
        >>> cache = WindowInfoCache(query_fn)
        >>> infos = cache.get()   # miss, queries the compositor
        >>> again = cache.get()   # hit within 100ms
        >>> assert infos is again
    """

    def __init__(
        self,
        query_fn: WindowQuery,
        timeout_ms: float = 100.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            query_fn: Compositor query, called as query_fn(ids, include_offscreen)
            timeout_ms: Entry time-to-live in milliseconds (default: 100ms)
            clock: Monotonic clock returning seconds; injectable for tests
        """
        self._query = query_fn
        self.timeout_ms = timeout_ms
        self._clock = clock
        self._entries: Dict[CacheKey, WindowInfoCacheEntry] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(ids: Optional[Sequence[int]], include_offscreen: bool) -> CacheKey:
        return (tuple(ids) if ids is not None else None, include_offscreen)

    def get(
        self,
        ids: Optional[Sequence[int]] = None,
        include_offscreen: bool = False,
    ) -> List[CompositorWindowInfo]:
        """Get compositor window info, querying only on a miss or expiry.

        Args:
            ids: Restrict the query to these window ids (None for all windows)
            include_offscreen: Also list windows that are not on screen

        Returns:
            Window info in compositor stacking order
        """
        key = self._key(ids, include_offscreen)
        now = self._clock()

        entry = self._entries.get(key)
        if entry is not None and not entry.is_expired(now):
            self.hits += 1
            logger.debug(
                f"Window list cache HIT (age: {entry.age_ms(now):.1f}ms, "
                f"hit rate: {self.hit_rate:.1f}%)"
            )
            return entry.infos

        self.misses += 1
        self._drop_expired(now)
        infos = self._fetch(ids, include_offscreen)
        self._entries[key] = WindowInfoCacheEntry(infos, now, ttl_ms=self.timeout_ms)

        logger.debug(
            f"Window list cache MISS ({len(infos)} windows, "
            f"hit rate: {self.hit_rate:.1f}%)"
        )
        return infos

    def _fetch(
        self, ids: Optional[Sequence[int]], include_offscreen: bool
    ) -> List[CompositorWindowInfo]:
        try:
            return list(self._query(ids, include_offscreen))
        except Exception as e:
            # An empty list excludes every window downstream; nothing moves
            logger.warning(f"Compositor window query failed: {type(e).__name__}: {e}")
            return []

    def _drop_expired(self, now: float):
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            del self._entries[key]

    def invalidate(self):
        """Drop every cached entry."""
        self._entries.clear()

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    @property
    def total_queries(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Cache hit rate as a percentage."""
        if self.total_queries == 0:
            return 0.0
        return self.hits / self.total_queries * 100
