#!/usr/bin/env python3
"""
Moon smart cache

Keyed by the instant floored to the minute. Each entry lives for the
MoonData's optimal_cache_ttl: the modeled time until the rounded
illumination changes, clamped to [60, 3600] seconds. Two reads that far
apart differ by at most one whole percent.
"""

from __future__ import annotations

from datetime import datetime

from astrocache.core.logging import get_cache_logger
from astrocache.engine.constants import MOON_TTL_MAX_SECONDS, MOON_TTL_MIN_SECONDS
from astrocache.engine.core_types import MoonData
from astrocache.engine.errors import ComputationFailed
from astrocache.engine.moon_illumination import calculate_moon_data
from astrocache.engine.swe_backend import EphemerisProvider
from astrocache.engine.time_utils import epoch_minute

from .ttl_store import ExpiringStore

logger = get_cache_logger("moon")


def moon_key(ts_utc: datetime) -> str:
    return f"moon:{epoch_minute(ts_utc)}"


class MoonCache:
    """MoonData with illumination-driven expiry"""

    def __init__(
        self,
        provider: EphemerisProvider,
        store: ExpiringStore,
        ttl_min_seconds: float = MOON_TTL_MIN_SECONDS,
        ttl_max_seconds: float = MOON_TTL_MAX_SECONDS,
    ):
        self.provider = provider
        self.store = store
        self.ttl_min_seconds = ttl_min_seconds
        self.ttl_max_seconds = ttl_max_seconds

    def get_moon_data(self, ts_utc: datetime) -> MoonData:
        def compute():
            try:
                moon = calculate_moon_data(
                    self.provider, ts_utc, self.ttl_min_seconds, self.ttl_max_seconds
                )
            except ComputationFailed as e:
                logger.warning(f"Moon computation failed: {e}")
                raise
            return moon, moon.optimal_cache_ttl

        return self.store.get_or_compute(moon_key(ts_utc), compute)
