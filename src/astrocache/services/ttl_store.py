#!/usr/bin/env python3
"""
Expiring key-value store with per-entry TTL and striped compute locks

Each entry carries its own expiry, so callers choose a TTL per write.
Misses on the same key serialize behind one stripe lock and compute once;
misses on keys in different stripes compute in parallel. The map itself is
guarded by a short-held lock that never spans a computation.
"""

import threading
import time

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from astrocache.core.logging import get_cache_logger
from astrocache.engine.constants import DEFAULT_LOCK_STRIPES, MAX_CACHE_ENTRIES

from .eviction import evict_expired
from .metrics import CacheMetrics


@dataclass(frozen=True)
class CacheEntry:
    """Single cache entry; replaced on recompute, never updated"""

    key: str
    value: Any
    expires_at: float  # time.monotonic() deadline


class ExpiringStore:
    """
    Thread-safe store with per-entry expiry and bounded size.

    Features:
    - Expired entries are treated as absent on read and dropped
    - Expiry-first eviction on every write once over ``max_entries``
    - Lock striping so unrelated keys never wait on each other's compute
    """

    def __init__(
        self,
        name: str,
        max_entries: int = MAX_CACHE_ENTRIES,
        lock_stripes: int = DEFAULT_LOCK_STRIPES,
    ):
        self.name = name
        self.max_entries = max_entries
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stripes = [threading.Lock() for _ in range(max(1, lock_stripes))]
        self._metrics = CacheMetrics(name)
        self._logger = get_cache_logger(name)

        # Statistics
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _stripe(self, key: str) -> threading.Lock:
        return self._stripes[hash(key) % len(self._stripes)]

    def get(self, key: str) -> Any | None:
        """
        Get cached value if present and not expired.

        Returns:
            Cached value or None if not found/expired
        """
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self._misses += 1
                self._metrics.record_miss()
                return None

            if entry.expires_at <= now:
                del self._entries[key]
                self._misses += 1
                self._evictions += 1
                self._metrics.record_miss()
                self._metrics.record_evictions(1)
                self._metrics.set_size(len(self._entries))
                return None

            self._hits += 1
            self._metrics.record_hit()
            return entry.value

    def put(self, key: str, value: Any, ttl: float) -> CacheEntry:
        """Store ``value`` for ``ttl`` seconds, then run the eviction policy."""
        now = time.monotonic()
        entry = CacheEntry(key=key, value=value, expires_at=now + ttl)

        with self._lock:
            self._entries[key] = entry
            removed = evict_expired(self._entries, self.max_entries, now)
            self._evictions += removed
            size = len(self._entries)

        self._metrics.record_evictions(removed)
        self._metrics.set_size(size)
        if removed:
            self._logger.debug(f"Evicted {removed} expired entries from {self.name}")
        return entry

    def get_or_compute(self, key: str, compute: Callable[[], tuple[Any, float]]) -> Any:
        """
        Return the live value for ``key``, computing it on a miss.

        ``compute`` returns ``(value, ttl_seconds)``. Exceptions from it
        propagate and nothing is stored.
        """
        value = self.get(key)
        if value is not None:
            return value

        with self._stripe(key):
            # Another thread may have filled the key while we waited
            value = self._peek(key)
            if value is not None:
                return value

            started = time.perf_counter()
            value, ttl = compute()
            self._metrics.observe_compute(time.perf_counter() - started)
            self._logger.debug(f"Computed {key} (ttl={ttl}s)")
            self.put(key, value, ttl)
            return value

    def _peek(self, key: str) -> Any | None:
        """Live value without touching hit/miss statistics."""
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.expires_at <= now:
                return None
            return entry.value

    def entry(self, key: str) -> CacheEntry | None:
        """Raw entry including its expiry, live or not."""
        with self._lock:
            return self._entries.get(key)

    def live_count(self) -> int:
        now = time.monotonic()
        with self._lock:
            return sum(1 for e in self._entries.values() if e.expires_at > now)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self._peek(key) is not None

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0
        self._metrics.set_size(0)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        hit_rate = self._hits / total if total > 0 else 0.0

        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": hit_rate,
            "evictions": self._evictions,
            "size": len(self._entries),
            "max_entries": self.max_entries,
        }
