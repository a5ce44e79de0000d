#!/usr/bin/env python3
"""
Astronomical cache service

One explicit object owning the position, Moon and aspect caches. Create it
once at process start and pass it to callers; all cached data is geocentric
and shared by every caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from astrocache.core.config import CacheConfig
from astrocache.core.logging import get_cache_logger
from astrocache.engine.core_types import Aspect, MoonData, PlanetPosition, SkyEvent
from astrocache.engine.position_resolver import PositionResolver
from astrocache.engine.sky_events import (
    retrograde_ingresses,
    retrograde_stations,
    seasonal_events,
    sign_ingresses,
)
from astrocache.engine.swe_backend import EphemerisProvider, SwissEphemerisProvider
from astrocache.engine.transit_duration import DurationEstimator, MeanMotionDurationEstimator

from .aspect_cache import AspectCache
from .moon_cache import MoonCache
from .position_cache import PositionCache
from .ttl_store import ExpiringStore

logger = get_cache_logger("service")


class AstronomicalCacheService:
    """
    Position, Moon illumination and aspect caches behind one handle.

    Features:
    - Per-body TTLs with boundary refresh for positions
    - Illumination-driven TTL for Moon data
    - Signature-keyed aspects with a fixed TTL
    - Expiry-first eviction on every write
    """

    def __init__(
        self,
        provider: EphemerisProvider | None = None,
        estimator: DurationEstimator | None = None,
        config: CacheConfig | None = None,
    ):
        self.config = config or CacheConfig()
        self.provider = provider or SwissEphemerisProvider(self.config.ephemeris_path)
        self.estimator = estimator or MeanMotionDurationEstimator()

        self._stores = {
            name: ExpiringStore(name, self.config.max_entries, self.config.lock_stripes)
            for name in ("positions", "moon", "aspects")
        }

        self.positions = PositionCache(
            PositionResolver(self.provider, self.estimator),
            self._stores["positions"],
            boundary_factor=self.config.boundary_ttl_factor,
        )
        self.moon = MoonCache(
            self.provider,
            self._stores["moon"],
            ttl_min_seconds=self.config.moon_ttl_min_seconds,
            ttl_max_seconds=self.config.moon_ttl_max_seconds,
        )
        self.aspects = AspectCache(self._stores["aspects"], self.config.aspect_ttl_seconds)

        logger.info(
            "Astronomical cache service initialized",
            extra={"max_entries": self.config.max_entries},
        )

    def get_positions(self, ts_utc: datetime) -> dict[str, PlanetPosition]:
        """All ten bodies, Sun through Pluto."""
        return self.positions.get_positions(ts_utc)

    def get_position(self, body: str, ts_utc: datetime) -> PlanetPosition:
        return self.positions.get_position(body, ts_utc)

    def get_moon_data(self, ts_utc: datetime) -> MoonData:
        return self.moon.get_moon_data(ts_utc)

    def get_aspects(self, positions: Mapping[str, PlanetPosition]) -> list[Aspect]:
        return self.aspects.get_aspects(positions)

    def get_sky_events(self, ts_utc: datetime) -> list[SkyEvent]:
        """Sky events for the instant, highest priority first."""
        positions = self.get_positions(ts_utc)
        events = (
            seasonal_events(positions)
            + retrograde_stations(positions)
            + sign_ingresses(positions)
            + retrograde_ingresses(positions)
        )
        return sorted(events, key=lambda e: e.priority, reverse=True)

    def stats(self) -> dict[str, dict[str, Any]]:
        """Per-cache statistics."""
        return {name: store.get_stats() for name, store in self._stores.items()}

    def clear(self) -> None:
        """Drop every cached entry."""
        for store in self._stores.values():
            store.clear()
