#!/usr/bin/env python3
"""
Position resolver: ephemeris samples -> immutable PlanetPosition

Samples each body at the instant and 24h/48h before it, classifies the
apparent motion, and attaches the optional transit-duration annotation.
Ephemeris failures propagate as ComputationFailed; nothing is substituted.
"""

from __future__ import annotations

import logging

from datetime import datetime, timedelta

from .constants import MOTION_SAMPLE_HOURS
from .core_types import PlanetPosition
from .motion import classify_motion
from .swe_backend import EphemerisProvider
from .time_utils import ensure_utc
from .transit_duration import DurationEstimator
from .zodiac import degree_in_sign, minutes_in_degree, sign_of

logger = logging.getLogger(__name__)


def sample_longitudes(
    provider: EphemerisProvider, body: str, ts_utc: datetime
) -> tuple[float, float, float]:
    """Longitudes at the instant, one sample step before, and two before."""
    step = timedelta(hours=MOTION_SAMPLE_HOURS)
    return (
        provider.ecliptic_longitude(body, ts_utc),
        provider.ecliptic_longitude(body, ts_utc - step),
        provider.ecliptic_longitude(body, ts_utc - 2 * step),
    )


class PositionResolver:
    """Builds PlanetPosition records from an ephemeris provider"""

    def __init__(
        self,
        provider: EphemerisProvider,
        estimator: DurationEstimator | None = None,
    ):
        self.provider = provider
        self.estimator = estimator

    def resolve(self, body: str, ts_utc: datetime) -> PlanetPosition:
        ts_utc = ensure_utc(ts_utc)
        now, prev, prevprev = sample_longitudes(self.provider, body, ts_utc)
        motion = classify_motion(now, prev, prevprev)
        sign = sign_of(now)

        return PlanetPosition(
            body=body,
            longitude=now,
            sign=sign,
            degree_in_sign=degree_in_sign(now),
            minutes=minutes_in_degree(now),
            retrograde=motion.retrograde,
            newly_retrograde=motion.newly_retrograde,
            newly_direct=motion.newly_direct,
            duration=self._duration(body, sign, now, ts_utc),
        )

    def _duration(self, body: str, sign: str, longitude: float, ts_utc: datetime):
        if self.estimator is None:
            return None
        try:
            return self.estimator.estimate(body, sign, longitude, ts_utc)
        except (LookupError, ValueError) as e:
            # Unresolved duration is "unknown", not an error
            logger.debug(f"Duration unresolved for {body}: {e}")
            return None
