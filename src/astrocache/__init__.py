"""
astrocache - astronomical position and illumination caching engine

Zodiacal positions, retrograde flags, Moon illumination and aspects for
Sun through Pluto, cached behind per-entity expiration policies.
"""

from astrocache.core.config import CacheConfig
from astrocache.engine import (
    Aspect,
    ComputationFailed,
    MoonData,
    PlanetPosition,
    format_cache_info,
    format_degree_minutes,
    format_supermoon_info,
)
from astrocache.services import AstronomicalCacheService

__version__ = "1.0.0"

__all__ = [
    "Aspect",
    "AstronomicalCacheService",
    "CacheConfig",
    "ComputationFailed",
    "MoonData",
    "PlanetPosition",
    "format_cache_info",
    "format_degree_minutes",
    "format_supermoon_info",
]
