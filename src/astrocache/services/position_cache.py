#!/usr/bin/env python3
"""
Variable-TTL position cache

TTL per body comes from a base table that grows with orbital period, and
shrinks to a quarter when the body is close to a sign boundary so ingress
timing stays accurate even for slow outer planets.
"""

from __future__ import annotations

import math

from datetime import datetime

from astrocache.core.logging import get_cache_logger
from astrocache.engine.constants import (
    BODIES,
    BOUNDARY_ENTRY_DEGREE,
    BOUNDARY_EXIT_DEGREE,
    BOUNDARY_TTL_FACTOR,
    DEFAULT_BASE_TTL,
    PLANET_BASE_TTL,
)
from astrocache.engine.core_types import PlanetPosition
from astrocache.engine.errors import ComputationFailed
from astrocache.engine.position_resolver import PositionResolver
from astrocache.engine.time_utils import epoch_second
from astrocache.engine.zodiac import position_in_sign

from .ttl_store import ExpiringStore

logger = get_cache_logger("positions")


def is_near_boundary(longitude: float) -> bool:
    """Within the last 2° or the first 1° of a sign (inclusive)."""
    deg = position_in_sign(longitude)
    return deg >= BOUNDARY_EXIT_DEGREE or deg <= BOUNDARY_ENTRY_DEGREE


def position_ttl(body: str, longitude: float, boundary_factor: float = BOUNDARY_TTL_FACTOR) -> int:
    """TTL in seconds for a body at a longitude.

    Examples:
    - Moon at 29° Aries: 900s -> 225s
    - Mars at 0° Taurus: 21600s -> 5400s
    - Saturn at 28° Pisces: 604800s -> 151200s
    """
    base = PLANET_BASE_TTL.get(body, DEFAULT_BASE_TTL)
    if is_near_boundary(longitude):
        return int(math.floor(base * boundary_factor))
    return base


def position_key(body: str, ts_utc: datetime) -> str:
    return f"{body}:{epoch_second(ts_utc)}"


class PositionCache:
    """PlanetPosition per (body, instant floored to the second)"""

    def __init__(
        self,
        resolver: PositionResolver,
        store: ExpiringStore,
        boundary_factor: float = BOUNDARY_TTL_FACTOR,
    ):
        self.resolver = resolver
        self.store = store
        self.boundary_factor = boundary_factor

    def get_position(self, body: str, ts_utc: datetime) -> PlanetPosition:
        def compute():
            try:
                position = self.resolver.resolve(body, ts_utc)
            except ComputationFailed as e:
                logger.warning(f"Position computation failed for {body}: {e}")
                raise
            return position, position_ttl(body, position.longitude, self.boundary_factor)

        return self.store.get_or_compute(position_key(body, ts_utc), compute)

    def get_positions(self, ts_utc: datetime) -> dict[str, PlanetPosition]:
        """All ten bodies, Sun through Pluto."""
        return {body: self.get_position(body, ts_utc) for body in BODIES}
