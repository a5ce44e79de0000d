#!/usr/bin/env python3
"""
Zodiac math: ecliptic longitude -> sign, degree, minutes

Pure functions, total over any real input through modular normalization.
Degree/minute values are computed on ``longitude mod 30`` independent of sign.
"""

from __future__ import annotations

import math

from .constants import SIGN_DESCRIPTIONS, SIGN_SPAN, ZODIAC_SIGNS
from .numerics import normalize_angle, round_half_up


def sign_index(longitude: float) -> int:
    """Zodiac sign index 0-11 (0 = Aries)."""
    return min(int(normalize_angle(longitude) // SIGN_SPAN), 11)


def sign_of(longitude: float) -> str:
    """Zodiac sign name for a longitude."""
    return ZODIAC_SIGNS[sign_index(longitude)]


def position_in_sign(longitude: float) -> float:
    """Fractional degrees within the sign, [0, 30)."""
    x = float(longitude) % SIGN_SPAN
    return 0.0 if x >= SIGN_SPAN else x


def degree_in_sign(longitude: float) -> int:
    """Whole degrees within the sign, [0, 30)."""
    return int(math.floor(position_in_sign(longitude)))


def minutes_in_degree(longitude: float) -> int:
    """Arc-minutes within the degree, rounded, [0, 60).

    Rounding can reach 60 for the last half minute of a degree; that case
    is held at 59 so the degree never rolls over into the next sign.
    """
    fraction = position_in_sign(longitude) % 1.0
    return min(round_half_up(fraction * 60.0), 59)


def format_degree_minutes(longitude: float) -> str:
    """Format as D°MM′, e.g. 15.5 -> "15°30′"."""
    return f"{degree_in_sign(longitude)}°{minutes_in_degree(longitude):02d}′"


def sign_description(sign: str) -> str:
    """Short quality phrase for a sign."""
    return SIGN_DESCRIPTIONS.get(sign, "cosmic")
