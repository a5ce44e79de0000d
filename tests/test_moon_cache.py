from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from astrocache.engine.errors import ComputationFailed
from astrocache.services.moon_cache import MoonCache, moon_key
from astrocache.services.ttl_store import ExpiringStore

from conftest import FakeEphemeris


def _cache(ephem):
    return MoonCache(ephem, ExpiringStore("moon-test"))


def test_key_floors_to_minute(instant):
    assert moon_key(instant) == moon_key(instant + timedelta(seconds=59, milliseconds=999))
    assert moon_key(instant) != moon_key(instant + timedelta(minutes=1))


def test_same_minute_shares_entry(fake_ephemeris, clock, instant):
    cache = _cache(fake_ephemeris)
    first = cache.get_moon_data(instant)
    calls = fake_ephemeris.calls["illumination"]

    assert cache.get_moon_data(instant + timedelta(seconds=30)) is first
    assert fake_ephemeris.calls["illumination"] == calls


def test_entry_lives_for_optimal_ttl(fake_ephemeris, clock, instant):
    cache = _cache(fake_ephemeris)
    moon = cache.get_moon_data(instant)
    entry = cache.store.entry(moon_key(instant))
    assert entry.expires_at - clock.now == pytest.approx(moon.optimal_cache_ttl)

    clock.advance(moon.optimal_cache_ttl - 1)
    assert cache.get_moon_data(instant) is moon

    clock.advance(1)
    assert cache.get_moon_data(instant) is not moon


def test_ttl_bounds_and_illumination_drift(clock):
    ephem = FakeEphemeris()
    cache = _cache(ephem)
    ts = datetime(2025, 3, 1, tzinfo=timezone.utc)
    for _ in range(60):
        moon = cache.get_moon_data(ts)
        assert 60 <= moon.optimal_cache_ttl <= 3600

        later = cache.get_moon_data(ts + timedelta(seconds=moon.optimal_cache_ttl))
        assert abs(later.illumination - moon.illumination) <= 1
        ts += timedelta(hours=11, minutes=17)


def test_configured_ttl_bounds_apply(fake_ephemeris, clock, instant):
    cache = MoonCache(fake_ephemeris, ExpiringStore("moon-test"), 120, 300)
    moon = cache.get_moon_data(instant)
    assert 120 <= moon.optimal_cache_ttl <= 300


def test_failure_propagates_and_is_not_cached(clock, instant):
    ephem = FakeEphemeris()
    ephem.failing.add("Moon")
    cache = _cache(ephem)

    with pytest.raises(ComputationFailed):
        cache.get_moon_data(instant)
    assert moon_key(instant) not in cache.store
