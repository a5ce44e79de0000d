"""Human-readable summaries of positions and Moon data."""

from __future__ import annotations

from .core_types import MoonData
from .numerics import round_half_up
from .zodiac import format_degree_minutes

__all__ = [
    "format_cache_info",
    "format_degree_minutes",
    "format_duration_seconds",
    "format_illumination",
    "format_moon_distance",
    "format_supermoon_info",
]


def format_illumination(illumination_precise: float, show_decimals: bool = False) -> str:
    """50.123 -> "50%" or "50.123%"."""
    if show_decimals:
        return f"{illumination_precise:.3f}%"
    return f"{round_half_up(illumination_precise)}%"


def format_moon_distance(distance_km: float, super_moon: bool, micro_moon: bool) -> str:
    """Distance with thousands separators and perigee/apogee annotation."""
    text = f"{round_half_up(distance_km):,} km"
    if super_moon:
        return f"{text} (Supermoon - Extra close)"
    if micro_moon:
        return f"{text} (Micromoon - Extra far)"
    return text


def format_supermoon_info(moon: MoonData) -> str:
    """Distance, classification and apparent size on one line."""
    arcminutes = moon.angular_size / 60.0
    distance = format_moon_distance(moon.distance_km, moon.is_super_moon, moon.is_micro_moon)
    return f"{distance}, apparent size {arcminutes:.1f}′"


def format_duration_seconds(seconds: float) -> str:
    """3725 -> "1h 2m 5s"; minutes and seconds only below an hour."""
    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_cache_info(moon: MoonData) -> str:
    """Change rate, time to the next whole percent and chosen TTL."""
    return (
        f"{moon.illumination_precise:.3f}% {moon.trend} at "
        f"{moon.change_rate_per_hour:.3f}%/h; next 1% change in "
        f"{format_duration_seconds(moon.next_percentage_in)}; "
        f"cache refresh in {format_duration_seconds(moon.optimal_cache_ttl)}"
    )
