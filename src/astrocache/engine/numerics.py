#!/usr/bin/env python3
"""
Numerical helpers used across engine modules.
"""

from __future__ import annotations

import math


def normalize_angle(deg: float) -> float:
    """Normalize an angle in degrees to [0, 360).

    Handles negative inputs robustly, including tiny negatives whose
    float modulo rounds up to 360.0.
    """
    x = float(deg) % 360.0
    return 0.0 if x >= 360.0 else x


def clamp_value(v: float, lo: float, hi: float) -> float:
    """Clamp a value into [lo, hi]."""
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


def round_half_up(x: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(x + 0.5))


def angular_separation(a: float, b: float) -> float:
    """Minimal angular distance between two longitudes, in [0, 180]."""
    delta = abs(a - b) % 360.0
    return 360.0 - delta if delta > 180.0 else delta
