#!/usr/bin/env python3
"""
Sky events derived from a positions map: seasons, ingresses, stations
"""

from __future__ import annotations

from collections.abc import Mapping

from .core_types import PlanetPosition, SkyEvent
from .numerics import angular_separation
from .zodiac import position_in_sign

# (solar longitude, name, energy, emoji, description)
SEASONAL_MARKERS = (
    (0.0, "Spring Equinox", "Balance & New Growth", "🌸", "Day and night in perfect balance"),
    (90.0, "Summer Solstice", "Maximum Solar Power", "☀️", "Longest day of the year"),
    (180.0, "Autumn Equinox", "Harvest & Reflection", "🍂", "Day and night in perfect balance"),
    (270.0, "Winter Solstice", "Inner Light & Renewal", "❄️", "Longest night of the year"),
)

SEASONAL_ORB = 1.0
INGRESS_WINDOW = 2.0
RETROGRADE_INGRESS_WINDOW = 1.0


def _by_priority(events: list[SkyEvent]) -> list[SkyEvent]:
    return sorted(events, key=lambda e: e.priority, reverse=True)


def seasonal_events(positions: Mapping[str, PlanetPosition]) -> list[SkyEvent]:
    """Equinox/solstice when the Sun is within 1° of a cardinal point."""
    sun = positions.get("Sun")
    if sun is None:
        return []
    for longitude, name, energy, emoji, description in SEASONAL_MARKERS:
        if angular_separation(sun.longitude, longitude) < SEASONAL_ORB:
            return [
                SkyEvent(
                    name=name,
                    energy=energy,
                    priority=9,
                    type="seasonal",
                    emoji=emoji,
                    description=description,
                )
            ]
    return []


def sign_ingresses(positions: Mapping[str, PlanetPosition]) -> list[SkyEvent]:
    """Bodies within the first 2° of their sign."""
    events = [
        SkyEvent(
            name=f"{body} enters {pos.sign}",
            energy=f"{body} energy shifts",
            priority=8,
            type="ingress",
            body=body,
            sign=pos.sign,
        )
        for body, pos in positions.items()
        if position_in_sign(pos.longitude) < INGRESS_WINDOW
    ]
    return _by_priority(events)


def retrograde_stations(positions: Mapping[str, PlanetPosition]) -> list[SkyEvent]:
    """Retrograde and direct stations within the last day."""
    events = []
    for body, pos in positions.items():
        if pos.newly_retrograde:
            events.append(
                SkyEvent(
                    name=f"{body} Retrograde Begins",
                    energy=f"{body} stations retrograde in {pos.sign}",
                    priority=9,
                    type="retrograde_start",
                    body=body,
                    sign=pos.sign,
                )
            )
        if pos.newly_direct:
            events.append(
                SkyEvent(
                    name=f"{body} Retrograde Ends",
                    energy=f"{body} stations direct in {pos.sign}",
                    priority=9,
                    type="retrograde_end",
                    body=body,
                    sign=pos.sign,
                )
            )
    return _by_priority(events)


def retrograde_ingresses(positions: Mapping[str, PlanetPosition]) -> list[SkyEvent]:
    """Retrograde bodies within the first 1° of their sign."""
    events = [
        SkyEvent(
            name=f"{body} is retrograde",
            energy=f"{body} is retrograde",
            priority=8,
            type="retrograde",
            body=body,
            sign=pos.sign,
        )
        for body, pos in positions.items()
        if pos.retrograde and position_in_sign(pos.longitude) < RETROGRADE_INGRESS_WINDOW
    ]
    return _by_priority(events)
