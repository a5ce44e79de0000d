from __future__ import annotations

from astrocache import AstronomicalCacheService, CacheConfig
from astrocache.engine.constants import BODIES

from conftest import FakeEphemeris


def _service(ephem=None):
    return AstronomicalCacheService(provider=ephem or FakeEphemeris(), config=CacheConfig.testing())


def test_positions_are_cached_per_second(clock, instant):
    ephem = FakeEphemeris()
    service = _service(ephem)

    first = service.get_positions(instant)
    calls = sum(ephem.calls.values())
    second = service.get_positions(instant)

    assert list(first) == list(BODIES)
    assert all(second[body] is first[body] for body in BODIES)
    assert sum(ephem.calls.values()) == calls
    assert service.get_position("Mars", instant) is first["Mars"]


def test_positions_carry_durations(clock, instant):
    service = _service()
    assert service.get_position("Sun", instant).duration is not None


def test_moon_and_aspects(clock, instant):
    service = _service()
    moon = service.get_moon_data(instant)
    assert service.get_moon_data(instant) is moon

    positions = service.get_positions(instant)
    aspects = service.get_aspects(positions)
    assert aspects == service.get_aspects(positions)
    assert all(a.priority >= b.priority for a, b in zip(aspects, aspects[1:]))


def test_sky_events_sorted(clock, instant):
    # Sun sits 0.3° past the Aries point at the instant
    ephem = FakeEphemeris(longitudes={"Sun": 0.3 - 31.5})
    events = _service(ephem).get_sky_events(instant)

    assert events[0].name == "Spring Equinox"
    assert "Sun enters Aries" in [e.name for e in events]
    priorities = [e.priority for e in events]
    assert priorities == sorted(priorities, reverse=True)


def test_stats_and_clear(clock, instant):
    service = _service()
    service.get_positions(instant)
    service.get_positions(instant)
    service.get_moon_data(instant)

    stats = service.stats()
    assert set(stats) == {"positions", "moon", "aspects"}
    assert stats["positions"]["size"] == len(BODIES)
    assert stats["positions"]["hits"] == len(BODIES)
    assert stats["moon"]["misses"] == 1
    assert stats["positions"]["max_entries"] == 50

    service.clear()
    assert service.stats()["positions"]["size"] == 0


def test_independent_services_do_not_share_state(clock, instant):
    a = _service()
    b = _service()
    a.get_positions(instant)
    assert b.stats()["positions"]["size"] == 0
