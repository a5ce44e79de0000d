#!/usr/bin/env python3
"""
Swiss Ephemeris backend interface
Thread-safe geocentric tropical calculations for Sun through Pluto
"""

from __future__ import annotations

import math
import threading

from datetime import datetime
from typing import Protocol

import swisseph as swe

from .constants import AU_KM, SWE_BODY_IDS
from .errors import ComputationFailed
from .numerics import clamp_value, normalize_angle
from .time_utils import datetime_to_julian_day, ensure_utc

# ============================================================================
# SWISS EPHEMERIS CONFIGURATION
# ============================================================================

# Thread lock for Swiss Ephemeris calls (it's not thread-safe)
_swe_lock = threading.Lock()

# Geocentric, tropical, apparent positions
FLAGS = swe.FLG_SWIEPH | swe.FLG_SPEED

# Geocentric rectangular ecliptic coordinates (AU)
FLAGS_XYZ = swe.FLG_SWIEPH | swe.FLG_XYZ

Vector3 = tuple[float, float, float]


# ============================================================================
# PROVIDER PROTOCOL
# ============================================================================


class EphemerisProvider(Protocol):
    """Source of geocentric ephemeris samples.

    Implementations must be deterministic for a given instant and raise
    ComputationFailed when the instant cannot be computed.
    """

    def ecliptic_longitude(self, body: str, ts_utc: datetime) -> float:
        """Geocentric ecliptic longitude in degrees [0, 360)."""
        ...

    def geocentric_vector(self, body: str, ts_utc: datetime) -> Vector3:
        """Geocentric ecliptic rectangular vector in km."""
        ...

    def moon_illumination(self, ts_utc: datetime) -> tuple[float, float]:
        """(illuminated fraction [0, 1], phase angle in degrees [0, 360))."""
        ...


# ============================================================================
# SWISS EPHEMERIS PROVIDER
# ============================================================================


def set_ephemeris_path(path: str | None = None) -> None:
    """Set ephemeris data path (None for the built-in Moshier fallback)"""
    with _swe_lock:
        swe.set_ephe_path(path)


def _body_id(body: str, ts_utc: datetime) -> int:
    try:
        return SWE_BODY_IDS[body]
    except KeyError:
        raise ComputationFailed(f"Unknown body: {body}", body=body, ts_utc=ts_utc) from None


def _calc(body: str, ts_utc: datetime, flags: int) -> tuple[float, ...]:
    """Run swe.calc_ut under the lock, mapping failures to ComputationFailed."""
    body_id = _body_id(body, ts_utc)
    try:
        jd = datetime_to_julian_day(ensure_utc(ts_utc))
        with _swe_lock:
            values, _retflag = swe.calc_ut(jd, body_id, flags)
    except (swe.Error, ValueError, OverflowError, TypeError, AttributeError) as e:
        raise ComputationFailed(
            f"Ephemeris calculation failed for {body} at {ts_utc!r}: {e}",
            body=body,
            ts_utc=ts_utc,
        ) from e
    return tuple(values)


class SwissEphemerisProvider:
    """EphemerisProvider backed by pyswisseph"""

    def __init__(self, ephemeris_path: str | None = None):
        if ephemeris_path:
            set_ephemeris_path(ephemeris_path)

    def ecliptic_longitude(self, body: str, ts_utc: datetime) -> float:
        values = _calc(body, ts_utc, FLAGS)
        return normalize_angle(values[0])

    def geocentric_vector(self, body: str, ts_utc: datetime) -> Vector3:
        x, y, z = _calc(body, ts_utc, FLAGS_XYZ)[:3]
        return (x * AU_KM, y * AU_KM, z * AU_KM)

    def moon_illumination(self, ts_utc: datetime) -> tuple[float, float]:
        """Illuminated fraction from the Sun-Moon-Earth angle.

        Phase angle here is the Moon-Sun elongation in longitude
        (0 = new, 180 = full), not the Sun-Moon-Earth angle.
        """
        moon = self.geocentric_vector("Moon", ts_utc)
        sun = self.geocentric_vector("Sun", ts_utc)

        # Vectors from the Moon towards Earth and towards the Sun
        to_earth = tuple(-c for c in moon)
        to_sun = tuple(s - m for s, m in zip(sun, moon))
        dot = sum(a * b for a, b in zip(to_earth, to_sun))
        cos_i = clamp_value(dot / (_norm(to_earth) * _norm(to_sun)), -1.0, 1.0)
        fraction = (1.0 + cos_i) / 2.0

        moon_lon = normalize_angle(math.degrees(math.atan2(moon[1], moon[0])))
        sun_lon = normalize_angle(math.degrees(math.atan2(sun[1], sun[0])))
        phase_angle = normalize_angle(moon_lon - sun_lon)

        return fraction, phase_angle


def _norm(v) -> float:
    return math.sqrt(sum(c * c for c in v))
