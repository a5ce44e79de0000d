import math

from collections import Counter
from datetime import datetime, timezone

import pytest

from astrocache.engine.constants import BODIES
from astrocache.engine.core_types import PlanetPosition
from astrocache.engine.errors import ComputationFailed
from astrocache.engine.numerics import normalize_angle
from astrocache.engine.zodiac import degree_in_sign, minutes_in_degree, sign_of

EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)

# Mid-sign starting longitudes so TTLs use the base table unless a test moves them
DEFAULT_LONGITUDES = {
    "Sun": 280.0,
    "Moon": 15.0,
    "Mercury": 265.0,
    "Venus": 325.0,
    "Mars": 115.0,
    "Jupiter": 75.0,
    "Saturn": 345.0,
    "Uranus": 54.0,
    "Neptune": 357.0,
    "Pluto": 301.0,
}

DEFAULT_SPEEDS = {
    "Sun": 1.0,
    "Moon": 13.18,
    "Mercury": 1.4,
    "Venus": 1.2,
    "Mars": 0.5,
    "Jupiter": 0.08,
    "Saturn": 0.03,
    "Uranus": 0.01,
    "Neptune": 0.006,
    "Pluto": 0.004,
}


class FakeEphemeris:
    """Deterministic linear-motion ephemeris for tests.

    Longitude = start + speed * days since EPOCH. ``tracks`` overrides a
    body with an arbitrary function of days since EPOCH.
    """

    def __init__(
        self,
        longitudes=None,
        speeds=None,
        tracks=None,
        moon_distance_km=384400.0,
    ):
        self.longitudes = {**DEFAULT_LONGITUDES, **(longitudes or {})}
        self.speeds = {**DEFAULT_SPEEDS, **(speeds or {})}
        self.tracks = dict(tracks or {})
        self.moon_distance_km = moon_distance_km
        self.failing = set()
        self.calls = Counter()

    def _days(self, ts_utc):
        return (ts_utc - EPOCH).total_seconds() / 86400.0

    def ecliptic_longitude(self, body, ts_utc):
        self.calls[body] += 1
        if body in self.failing or body not in BODIES:
            raise ComputationFailed(f"fake failure for {body}", body=body, ts_utc=ts_utc)
        days = self._days(ts_utc)
        if body in self.tracks:
            return normalize_angle(self.tracks[body](days))
        return normalize_angle(self.longitudes[body] + self.speeds[body] * days)

    def geocentric_vector(self, body, ts_utc):
        lon = math.radians(self.ecliptic_longitude(body, ts_utc))
        distance = self.moon_distance_km if body == "Moon" else 149597870.7
        return (distance * math.cos(lon), distance * math.sin(lon), 0.0)

    def moon_illumination(self, ts_utc):
        self.calls["illumination"] += 1
        if "Moon" in self.failing:
            raise ComputationFailed("fake failure for Moon", body="Moon", ts_utc=ts_utc)
        phase = normalize_angle(
            self.ecliptic_longitude("Moon", ts_utc) - self.ecliptic_longitude("Sun", ts_utc)
        )
        fraction = (1.0 - math.cos(math.radians(phase))) / 2.0
        return fraction, phase


class FakeClock:
    """Controllable replacement for time.monotonic"""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fake_ephemeris():
    return FakeEphemeris()


@pytest.fixture
def clock(monkeypatch):
    import astrocache.services.ttl_store as ttl_store

    fake = FakeClock()
    monkeypatch.setattr(ttl_store.time, "monotonic", fake)
    return fake


@pytest.fixture
def instant():
    return datetime(2025, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_position(body, longitude, retrograde=False, newly_retrograde=False, newly_direct=False):
    """PlanetPosition built directly from a longitude, no ephemeris involved"""
    return PlanetPosition(
        body=body,
        longitude=longitude,
        sign=sign_of(longitude),
        degree_in_sign=degree_in_sign(longitude),
        minutes=minutes_in_degree(longitude),
        retrograde=retrograde,
        newly_retrograde=newly_retrograde,
        newly_direct=newly_direct,
    )
