"""
Prometheus metrics for the astronomical caches.

Metrics:
- astrocache_cache_hits_total{cache} - Unexpired reads
- astrocache_cache_misses_total{cache} - Absent or expired reads
- astrocache_cache_evictions_total{cache} - Entries dropped by expiry or eviction
- astrocache_cache_entries{cache} - Resident entries
- astrocache_compute_seconds{cache} - Time spent recomputing on a miss
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

cache_hits_total = Counter(
    "astrocache_cache_hits_total", "Cache reads served from an unexpired entry", ["cache"]
)

cache_misses_total = Counter(
    "astrocache_cache_misses_total", "Cache reads that found no live entry", ["cache"]
)

cache_evictions_total = Counter(
    "astrocache_cache_evictions_total",
    "Entries removed because they expired or the store was over its ceiling",
    ["cache"],
)

cache_entries = Gauge("astrocache_cache_entries", "Resident cache entries", ["cache"])

compute_seconds = Histogram(
    "astrocache_compute_seconds",
    "Recompute latency on cache miss",
    ["cache"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0),
)


class CacheMetrics:
    """Metric handles bound to one cache label"""

    def __init__(self, cache: str):
        self.cache = cache
        self.hits = cache_hits_total.labels(cache=cache)
        self.misses = cache_misses_total.labels(cache=cache)
        self.evictions = cache_evictions_total.labels(cache=cache)
        self.entries = cache_entries.labels(cache=cache)
        self.compute = compute_seconds.labels(cache=cache)

    def record_hit(self) -> None:
        self.hits.inc()

    def record_miss(self) -> None:
        self.misses.inc()

    def record_evictions(self, count: int) -> None:
        if count:
            self.evictions.inc(count)

    def set_size(self, size: int) -> None:
        self.entries.set(size)

    def observe_compute(self, duration: float) -> None:
        self.compute.observe(duration)
