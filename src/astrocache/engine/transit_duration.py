#!/usr/bin/env python3
"""
Transit-duration estimation: how long a body remains in its current sign

The estimator is an external collaborator of the position resolver; the
default here works from mean daily motion only, so it ignores retrograde
loops and is an estimate, not an ingress search.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from .constants import MEAN_DAILY_MOTION, SIGN_SPAN
from .core_types import TransitDuration
from .time_utils import ensure_utc
from .zodiac import position_in_sign


class DurationEstimator(Protocol):
    """Annotates a placement with its expected time in sign"""

    def estimate(
        self, body: str, sign: str, longitude: float, ts_utc: datetime
    ) -> TransitDuration | None:
        """Return the duration, or None when it cannot be resolved."""
        ...


def format_remaining(days: float) -> str:
    """Coarse human label for a remaining span"""
    if days < 1.0:
        hours = max(1, round(days * 24))
        return f"{hours} hour{'s' if hours != 1 else ''} left"
    if days < 14.0:
        n = round(days)
        return f"{n} day{'s' if n != 1 else ''} left"
    if days < 60.0:
        return f"{round(days / 7)} weeks left"
    if days < 730.0:
        return f"{round(days / 30.44)} months left"
    return f"{round(days / 365.25)} years left"


class MeanMotionDurationEstimator:
    """DurationEstimator using mean geocentric daily motion"""

    def __init__(self, daily_motion: dict[str, float] | None = None):
        self.daily_motion = daily_motion or MEAN_DAILY_MOTION

    def estimate(
        self, body: str, sign: str, longitude: float, ts_utc: datetime
    ) -> TransitDuration | None:
        speed = self.daily_motion.get(body)
        if not speed:
            return None

        ts_utc = ensure_utc(ts_utc)
        elapsed_deg = position_in_sign(longitude)
        elapsed_days = elapsed_deg / speed
        remaining_days = (SIGN_SPAN - elapsed_deg) / speed

        return TransitDuration(
            total_days=round(SIGN_SPAN / speed, 2),
            remaining_days=round(remaining_days, 2),
            display_text=format_remaining(remaining_days),
            start_date=ts_utc - timedelta(days=elapsed_days),
            end_date=ts_utc + timedelta(days=remaining_days),
        )
