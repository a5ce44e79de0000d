#!/usr/bin/env python3
"""
Moon Illumination Engine - illumination, phase, distance and cache timing

All calculations are geocentric and valid for any UTC instant.

The change-rate model is a heuristic, not physics: the illumination rate
is modeled as ``MAX_CHANGE_RATE * sin(d / 90 * pi / 2)`` where ``d`` is the
angular distance from the nearest of new/full. It is fastest at the quarters
and slowest at new/full, which is all the cache timing needs. The TTL clamp
in ``optimal_cache_ttl`` bounds the error of the model; changing the model
changes cache behaviour and the TTL tests must be revisited with it.
"""

from __future__ import annotations

import math

from datetime import datetime

from .constants import (
    APOGEE_KM,
    DISTANCE_BAND_KM,
    FULL_MOON_NAMES,
    MAX_CHANGE_RATE,
    MIN_CHANGE_RATE,
    MOON_RADIUS_KM,
    MOON_TTL_MAX_SECONDS,
    MOON_TTL_MIN_SECONDS,
    PERIGEE_KM,
    SYNODIC_MONTH_DAYS,
)
from .core_types import MoonData
from .numerics import clamp_value, normalize_angle, round_half_up
from .swe_backend import EphemerisProvider
from .time_utils import ensure_utc

# A gap smaller than this means the percentage was just crossed
JUST_CROSSED_EPSILON = 1e-6

# Exact phase windows (narrow) used for isSignificant
SIGNIFICANT_ORB = 2.0
# Quarter display windows (wide)
QUARTER_DISPLAY_ORB = 5.0

# (name, energy, emoji) per display phase
PHASE_STYLES = {
    "New Moon": ("New Beginnings", "🌑"),
    "Full Moon": ("Peak Power", "🌕"),
    "First Quarter": ("Action & Decision", "🌓"),
    "Third Quarter": ("Release & Letting Go", "🌗"),
    "Waxing Crescent": ("Growing Energy", "🌒"),
    "Waxing Gibbous": ("Building Power", "🌔"),
    "Waning Gibbous": ("Gratitude & Wisdom", "🌖"),
    "Waning Crescent": ("Rest & Reflection", "🌘"),
}


# ============================================================================
# PURE CALCULATIONS
# ============================================================================


def calculate_age(phase_angle: float) -> float:
    """Lunar age in days from the phase angle."""
    return (normalize_angle(phase_angle) / 360.0) * SYNODIC_MONTH_DAYS


def calculate_angular_size(distance_km: float) -> float:
    """Apparent diameter in arcseconds."""
    return math.degrees(2.0 * math.atan(MOON_RADIUS_KM / distance_km)) * 3600.0


def is_super_moon(distance_km: float) -> bool:
    return distance_km <= PERIGEE_KM + DISTANCE_BAND_KM


def is_micro_moon(distance_km: float) -> bool:
    return distance_km >= APOGEE_KM - DISTANCE_BAND_KM


def calculate_change_rate(phase_angle: float) -> float:
    """Modeled illumination change in percent/hour (see module docstring)."""
    p = normalize_angle(phase_angle)
    distance_from_peak = min(p, abs(p - 180.0), 360.0 - p)
    rate = MAX_CHANGE_RATE * math.sin((distance_from_peak / 90.0) * math.pi / 2.0)
    return max(rate, MIN_CHANGE_RATE)


def percentage_gap(illumination_precise: float, waxing: bool) -> float:
    """Percent left until the next whole percent in the trend direction."""
    if waxing:
        gap = math.ceil(illumination_precise) - illumination_precise
    else:
        gap = illumination_precise - math.floor(illumination_precise)
    if gap < JUST_CROSSED_EPSILON:
        return 1.0
    return gap


def seconds_until_next_percentage(
    illumination_precise: float, waxing: bool, change_rate_per_hour: float
) -> float:
    rate = max(change_rate_per_hour, MIN_CHANGE_RATE)
    hours = percentage_gap(illumination_precise, waxing) / rate
    return hours * 3600.0


def optimal_cache_ttl(
    next_percentage_in: float,
    min_seconds: float = MOON_TTL_MIN_SECONDS,
    max_seconds: float = MOON_TTL_MAX_SECONDS,
) -> float:
    return clamp_value(next_percentage_in, min_seconds, max_seconds)


def _near(phase_angle: float, target: float, orb: float) -> bool:
    delta = abs(phase_angle - target) % 360.0
    return min(delta, 360.0 - delta) <= orb


def is_significant_phase(phase_angle: float) -> bool:
    """Exact-phase window: within 2° of new, first quarter, full or third quarter."""
    return any(_near(phase_angle, t, SIGNIFICANT_ORB) for t in (0.0, 90.0, 180.0, 270.0))


def classify_phase(illumination: int, phase_angle: float, month: int) -> tuple[str, int, bool]:
    """Display phase name, priority and significance.

    Illumination bands win over angle bands; full moons get the
    traditional name for the calendar month.
    """
    significant = is_significant_phase(phase_angle)

    if illumination <= 3:
        return "New Moon", (10 if significant else 8), significant
    if illumination >= 97:
        return FULL_MOON_NAMES.get(month, "Full Moon"), (10 if significant else 8), significant
    if _near(phase_angle, 90.0, QUARTER_DISPLAY_ORB):
        return "First Quarter", (10 if significant else 6), significant
    if _near(phase_angle, 270.0, QUARTER_DISPLAY_ORB):
        return "Third Quarter", (10 if significant else 6), significant

    if phase_angle < 90.0:
        name = "Waxing Crescent"
    elif phase_angle < 180.0:
        name = "Waxing Gibbous"
    elif phase_angle < 270.0:
        name = "Waning Gibbous"
    else:
        name = "Waning Crescent"
    return name, 2, False


def _style(name: str) -> tuple[str, str]:
    # Named full moons share the Full Moon style
    return PHASE_STYLES.get(name, PHASE_STYLES["Full Moon"])


# ============================================================================
# ENGINE
# ============================================================================


def calculate_moon_data(
    provider: EphemerisProvider,
    ts_utc: datetime,
    ttl_min_seconds: float = MOON_TTL_MIN_SECONDS,
    ttl_max_seconds: float = MOON_TTL_MAX_SECONDS,
) -> MoonData:
    """Compute MoonData for an instant from the ephemeris provider."""
    ts_utc = ensure_utc(ts_utc)
    fraction, phase_angle = provider.moon_illumination(ts_utc)
    x, y, z = provider.geocentric_vector("Moon", ts_utc)

    phase_angle = normalize_angle(phase_angle)
    illumination_precise = clamp_value(fraction * 100.0, 0.0, 100.0)
    illumination = round_half_up(illumination_precise)
    waxing = phase_angle < 180.0

    distance_km = math.sqrt(x * x + y * y + z * z)
    super_moon = is_super_moon(distance_km)
    micro_moon = is_micro_moon(distance_km)

    change_rate = calculate_change_rate(phase_angle)
    next_in = seconds_until_next_percentage(illumination_precise, waxing, change_rate)

    name, priority, significant = classify_phase(illumination, phase_angle, ts_utc.month)
    energy, emoji = _style(name)
    if super_moon:
        energy = f"{energy} (Supermoon!)"
        priority = max(priority, 9)

    return MoonData(
        illumination=illumination,
        illumination_precise=illumination_precise,
        phase_angle=phase_angle,
        age=calculate_age(phase_angle),
        trend="waxing" if waxing else "waning",
        distance_km=distance_km,
        angular_size=calculate_angular_size(distance_km),
        is_super_moon=super_moon,
        is_micro_moon=micro_moon,
        change_rate_per_hour=change_rate,
        next_percentage_in=next_in,
        optimal_cache_ttl=optimal_cache_ttl(next_in, ttl_min_seconds, ttl_max_seconds),
        name=name,
        energy=energy,
        emoji=emoji,
        priority=priority,
        is_significant=significant,
    )


# ============================================================================
# NEXT PHASE
# ============================================================================

PHASE_TARGETS = (
    (90.0, "First Quarter"),
    (180.0, "Full Moon"),
    (270.0, "Third Quarter"),
    (360.0, "New Moon"),
)


def next_significant_phase(phase_angle: float) -> tuple[str, float]:
    """Next principal phase and hours until it, at the mean synodic rate."""
    p = normalize_angle(phase_angle)
    degrees_per_hour = 360.0 / (SYNODIC_MONTH_DAYS * 24.0)
    for target, name in PHASE_TARGETS:
        if p < target:
            return name, (target - p) / degrees_per_hour
    return "New Moon", (360.0 - p) / degrees_per_hour
