#!/usr/bin/env python3
"""
Time utilities for ephemeris calculations.

Provides UTC normalization, Julian day conversion and cache-key bucketing.
"""

from __future__ import annotations

import math

from datetime import datetime, timezone

import swisseph as swe


def ensure_utc(dt: datetime) -> datetime:
    """Ensure a datetime is timezone-aware and in UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_julian_day(dt: datetime) -> float:
    """Convert aware datetime to Julian Day (UT)."""
    dt = ensure_utc(dt)
    h = dt.hour + dt.minute / 60.0 + dt.second / 3600.0 + dt.microsecond / 3_600_000_000.0
    return swe.julday(dt.year, dt.month, dt.day, h)


def epoch_second(dt: datetime) -> int:
    """Instant floored to the whole second, as Unix seconds."""
    return math.floor(ensure_utc(dt).timestamp())


def epoch_minute(dt: datetime) -> int:
    """Instant floored to the whole minute, as Unix minutes."""
    return math.floor(ensure_utc(dt).timestamp() / 60.0)
