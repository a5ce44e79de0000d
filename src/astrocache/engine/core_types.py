#!/usr/bin/env python3
"""
Core data types for positions, Moon illumination and aspects
All records are immutable: caches replace them, never mutate them
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime

# ============================================================================
# TRANSIT DURATION
# ============================================================================


@dataclass(frozen=True)
class TransitDuration:
    """How long a body stays in its current sign"""

    total_days: float
    remaining_days: float
    display_text: str
    start_date: datetime
    end_date: datetime

    def to_dict(self) -> dict:
        return {
            "total_days": self.total_days,
            "remaining_days": self.remaining_days,
            "display_text": self.display_text,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


# ============================================================================
# PLANET POSITION
# ============================================================================


@dataclass(frozen=True)
class PlanetPosition:
    """Zodiacal position of one body at one instant"""

    body: str
    longitude: float  # Tropical longitude [0, 360)
    sign: str
    degree_in_sign: int  # [0, 30)
    minutes: int  # [0, 60)
    retrograde: bool
    newly_retrograde: bool  # Station retrograde within the last day
    newly_direct: bool  # Station direct within the last day
    duration: TransitDuration | None = None  # None = unknown

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        data = asdict(self)
        data["duration"] = self.duration.to_dict() if self.duration else None
        return data


# ============================================================================
# MOON DATA
# ============================================================================


@dataclass(frozen=True)
class MoonData:
    """Moon illumination metrics and phase classification"""

    # Illumination
    illumination: int  # Percent, rounded
    illumination_precise: float  # Percent, full precision
    phase_angle: float  # 0 = new, 180 = full
    age: float  # Days since new moon
    trend: str  # "waxing" | "waning"

    # Distance
    distance_km: float
    angular_size: float  # Arcseconds
    is_super_moon: bool
    is_micro_moon: bool

    # Cache timing
    change_rate_per_hour: float  # Percent/hour (heuristic model)
    next_percentage_in: float  # Seconds until next whole percent
    optimal_cache_ttl: float  # Seconds, clamped

    # Classification
    name: str
    energy: str
    emoji: str
    priority: int
    is_significant: bool

    @property
    def is_waxing(self) -> bool:
        return self.trend == "waxing"

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================================
# ASPECT
# ============================================================================


@dataclass(frozen=True)
class Aspect:
    """Major aspect between two bodies"""

    body_a: str
    body_b: str
    kind: str  # conjunction | sextile | square | trine | opposition
    separation_degrees: float  # Rounded to 0.1°
    priority: int

    @property
    def name(self) -> str:
        return f"{self.body_a}-{self.body_b} {self.kind}"

    @property
    def energy(self) -> str:
        return f"{self.body_a} {self.kind} {self.body_b}"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["name"] = self.name
        data["energy"] = self.energy
        return data


# ============================================================================
# SKY EVENT
# ============================================================================


@dataclass(frozen=True)
class SkyEvent:
    """Noteworthy sky event derived from a positions map"""

    name: str
    energy: str
    priority: int
    type: str  # seasonal | ingress | retrograde_start | retrograde_end | retrograde
    body: str | None = None
    sign: str | None = None
    emoji: str | None = None
    description: str | None = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}
