#!/usr/bin/env python3
"""
Apparent motion direction from finite longitude differences

Three samples (now, -24h, -48h) give the current direction and the
direction one day earlier; a change between the two is a station.
"""

from __future__ import annotations

from enum import Enum


class MotionState(Enum):
    """Apparent motion of a body over the last two sample intervals"""

    DIRECT = "direct"
    RETROGRADE = "retrograde"
    STATIONING_RETROGRADE = "stationing_retrograde"  # direct -> retrograde
    STATIONING_DIRECT = "stationing_direct"  # retrograde -> direct

    @property
    def retrograde(self) -> bool:
        return self in (MotionState.RETROGRADE, MotionState.STATIONING_RETROGRADE)

    @property
    def newly_retrograde(self) -> bool:
        return self is MotionState.STATIONING_RETROGRADE

    @property
    def newly_direct(self) -> bool:
        return self is MotionState.STATIONING_DIRECT


def is_backward(current: float, previous: float) -> bool:
    """True if motion from ``previous`` to ``current`` is retrograde.

    A raw difference of 180° or more means the pair straddles the 0°/360°
    seam, so the naive comparison is inverted.
    """
    if abs(current - previous) < 180.0:
        return current < previous
    return current > previous


def classify_motion(now: float, prev: float, prevprev: float) -> MotionState:
    """Classify motion from three longitude samples taken a day apart."""
    retrograde = is_backward(now, prev)
    was_retrograde = is_backward(prev, prevprev)

    if retrograde and not was_retrograde:
        return MotionState.STATIONING_RETROGRADE
    if was_retrograde and not retrograde:
        return MotionState.STATIONING_DIRECT
    return MotionState.RETROGRADE if retrograde else MotionState.DIRECT
