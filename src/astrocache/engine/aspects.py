#!/usr/bin/env python3
"""
Transit-to-transit aspect calculator
Major aspects only, with fixed orbs; ordered by priority
"""

from __future__ import annotations

from collections.abc import Mapping
from itertools import combinations

from .constants import ASPECT_TABLE, GREAT_CONJUNCTION, GREAT_CONJUNCTION_PRIORITY
from .core_types import Aspect, PlanetPosition
from .numerics import angular_separation


def classify_separation(separation: float) -> tuple[str, int] | None:
    """Aspect kind and base priority for a separation, or None.

    Orbs are exclusive: a separation exactly on the orb edge is not counted.
    """
    for kind, angle, orb, priority in ASPECT_TABLE:
        if abs(separation - angle) < orb:
            return kind, priority
    return None


def aspect_priority(kind: str, base: int, body_a: str, body_b: str) -> int:
    if kind == "conjunction" and {body_a, body_b} == GREAT_CONJUNCTION:
        return GREAT_CONJUNCTION_PRIORITY
    return base


def aspect_signature(positions: Mapping[str, PlanetPosition]) -> str:
    """Cache key: body longitudes rounded to 0.1°."""
    return ",".join(f"{body}={pos.longitude:.1f}" for body, pos in positions.items())


def calculate_aspects(positions: Mapping[str, PlanetPosition]) -> list[Aspect]:
    """All major aspects between every unordered pair, highest priority first."""
    aspects = []
    for (body_a, pos_a), (body_b, pos_b) in combinations(positions.items(), 2):
        separation = angular_separation(pos_a.longitude, pos_b.longitude)
        match = classify_separation(separation)
        if match is None:
            continue
        kind, base = match
        aspects.append(
            Aspect(
                body_a=body_a,
                body_b=body_b,
                kind=kind,
                separation_degrees=round(separation, 1),
                priority=aspect_priority(kind, base, body_a, body_b),
            )
        )

    # Stable sort keeps pair order within a priority
    return sorted(aspects, key=lambda a: a.priority, reverse=True)
