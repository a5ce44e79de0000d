#!/usr/bin/env python3
"""
Centralized astronomical constants, body tables and cache TTL policy values
Geocentric tropical zodiac - all values are shared by every caller
"""

import swisseph as swe

# ============================================================================
# BODIES
# ============================================================================
# Display order used by GetPositions (Sun through Pluto)
BODIES = (
    "Sun",
    "Moon",
    "Mercury",
    "Venus",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
    "Pluto",
)

# Swiss Ephemeris body IDs
SWE_BODY_IDS = {
    "Sun": swe.SUN,
    "Moon": swe.MOON,
    "Mercury": swe.MERCURY,
    "Venus": swe.VENUS,
    "Mars": swe.MARS,
    "Jupiter": swe.JUPITER,
    "Saturn": swe.SATURN,
    "Uranus": swe.URANUS,
    "Neptune": swe.NEPTUNE,
    "Pluto": swe.PLUTO,
}

# Mean geocentric daily motion in degrees/day
MEAN_DAILY_MOTION = {
    "Sun": 0.9856,
    "Moon": 13.1764,
    "Mercury": 1.3833,
    "Venus": 1.2000,
    "Mars": 0.5240,
    "Jupiter": 0.0831,
    "Saturn": 0.0334,
    "Uranus": 0.0117,
    "Neptune": 0.0060,
    "Pluto": 0.0040,
}

# ============================================================================
# ZODIAC
# ============================================================================
ZODIAC_SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

SIGN_SPAN = 30.0

SIGN_DESCRIPTIONS = {
    "Aries": "initiating and pioneering",
    "Taurus": "grounding and stabilizing",
    "Gemini": "communicating and adapting",
    "Cancer": "nurturing and protective",
    "Leo": "creative and expressive",
    "Virgo": "practical and analytical",
    "Libra": "harmonizing and diplomatic",
    "Scorpio": "transforming and intense",
    "Sagittarius": "expanding and philosophical",
    "Capricorn": "structuring and ambitious",
    "Aquarius": "innovative and independent",
    "Pisces": "intuitive and compassionate",
}

# ============================================================================
# POSITION CACHE TTL POLICY (seconds)
# ============================================================================
# Increases with orbital period: fast movers refresh often
PLANET_BASE_TTL = {
    "Moon": 900,  # 13°/day
    "Sun": 1800,  # 1°/day
    "Mercury": 3600,  # 1-4°/day
    "Venus": 7200,  # 1.2°/day
    "Mars": 21600,  # 0.5°/day
    "Jupiter": 86400,  # 0.08°/day
    "Saturn": 86400 * 7,  # 0.03°/day
    "Uranus": 86400 * 14,  # 0.01°/day
    "Neptune": 86400 * 30,  # 0.006°/day
    "Pluto": 86400 * 30,  # 0.004°/day
}
DEFAULT_BASE_TTL = 3600

# Near a sign boundary the TTL shrinks to a quarter.
# Exit band is 2° wide, entry band 1° wide.
BOUNDARY_EXIT_DEGREE = 28.0
BOUNDARY_ENTRY_DEGREE = 1.0
BOUNDARY_TTL_FACTOR = 0.25

# Motion samples taken 24h and 48h before the requested instant
MOTION_SAMPLE_HOURS = 24

# ============================================================================
# MOON
# ============================================================================
SYNODIC_MONTH_DAYS = 29.530588853
MOON_RADIUS_KM = 1737.4
AU_KM = 149597870.7

PERIGEE_KM = 356500.0
APOGEE_KM = 406700.0
# 10% of the perigee-apogee span on each side; the bands never overlap
DISTANCE_BAND_KM = (APOGEE_KM - PERIGEE_KM) * 0.10

# Illumination change-rate model (percent per hour)
MAX_CHANGE_RATE = 0.28
MIN_CHANGE_RATE = 0.01

MOON_TTL_MIN_SECONDS = 60
MOON_TTL_MAX_SECONDS = 3600

FULL_MOON_NAMES = {
    1: "Wolf Moon",
    2: "Snow Moon",
    3: "Worm Moon",
    4: "Pink Moon",
    5: "Flower Moon",
    6: "Strawberry Moon",
    7: "Buck Moon",
    8: "Sturgeon Moon",
    9: "Harvest Moon",
    10: "Hunter Moon",
    11: "Beaver Moon",
    12: "Cold Moon",
}

# ============================================================================
# ASPECTS
# ============================================================================
# (kind, exact angle, orb, priority)
ASPECT_TABLE = (
    ("conjunction", 0.0, 8.0, 7),
    ("sextile", 60.0, 6.0, 5),
    ("square", 90.0, 8.0, 6),
    ("trine", 120.0, 8.0, 6),
    ("opposition", 180.0, 8.0, 6),
)
GREAT_CONJUNCTION = frozenset({"Jupiter", "Saturn"})
GREAT_CONJUNCTION_PRIORITY = 9

ASPECT_CACHE_TTL = 3600

# ============================================================================
# CACHE SIZING
# ============================================================================
MAX_CACHE_ENTRIES = 1000
DEFAULT_LOCK_STRIPES = 16
