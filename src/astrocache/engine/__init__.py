"""
Astronomical position and illumination engine (pure computation)
"""

from .aspects import calculate_aspects
from .core_types import Aspect, MoonData, PlanetPosition, SkyEvent, TransitDuration
from .errors import AstroCacheError, ComputationFailed
from .formatters import format_cache_info, format_degree_minutes, format_supermoon_info
from .moon_illumination import calculate_moon_data, next_significant_phase
from .motion import MotionState, classify_motion
from .position_resolver import PositionResolver
from .swe_backend import EphemerisProvider, SwissEphemerisProvider
from .transit_duration import DurationEstimator, MeanMotionDurationEstimator

__all__ = [
    "Aspect",
    "AstroCacheError",
    "ComputationFailed",
    "DurationEstimator",
    "EphemerisProvider",
    "MeanMotionDurationEstimator",
    "MoonData",
    "MotionState",
    "PlanetPosition",
    "PositionResolver",
    "SkyEvent",
    "SwissEphemerisProvider",
    "TransitDuration",
    "calculate_aspects",
    "calculate_moon_data",
    "classify_motion",
    "format_cache_info",
    "format_degree_minutes",
    "format_supermoon_info",
    "next_significant_phase",
]
