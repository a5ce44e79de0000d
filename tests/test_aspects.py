from __future__ import annotations

import pytest

from astrocache.engine.aspects import (
    aspect_signature,
    calculate_aspects,
    classify_separation,
)
from astrocache.services.aspect_cache import AspectCache
from astrocache.services.ttl_store import ExpiringStore

from conftest import make_position


def _positions(**longitudes):
    return {body: make_position(body, lon) for body, lon in longitudes.items()}


@pytest.mark.parametrize(
    "separation,kind",
    [
        (0.0, "conjunction"),
        (7.9, "conjunction"),
        (8.0, None),
        (55.0, "sextile"),
        (54.0, None),
        (90.5, "square"),
        (125.0, "trine"),
        (180.0, "opposition"),
        (150.0, None),
    ],
)
def test_classify_separation(separation, kind):
    match = classify_separation(separation)
    assert (match[0] if match else None) == kind


def test_square_just_past_exact():
    aspects = calculate_aspects(_positions(Sun=10.0, Mars=100.5))
    assert len(aspects) == 1
    aspect = aspects[0]
    assert aspect.kind == "square"
    assert aspect.separation_degrees == 90.5
    assert aspect.priority == 6


def test_exact_opposition():
    aspects = calculate_aspects(_positions(Sun=0.0, Moon=180.0))
    assert [a.kind for a in aspects] == ["opposition"]
    assert aspects[0].separation_degrees == 180.0


def test_conjunction_across_aries_point():
    aspects = calculate_aspects(_positions(Venus=358.0, Mars=3.0))
    assert [(a.kind, a.separation_degrees) for a in aspects] == [("conjunction", 5.0)]


def test_jupiter_saturn_conjunction_outranks_everything():
    aspects = calculate_aspects(_positions(Sun=0.0, Moon=2.0, Jupiter=300.0, Saturn=301.0))
    assert aspects[0].body_a == "Jupiter"
    assert aspects[0].body_b == "Saturn"
    assert aspects[0].priority == 9
    assert aspects[1].priority == 7


def test_sorted_by_priority_descending():
    aspects = calculate_aspects(
        _positions(Sun=0.0, Moon=60.0, Mercury=120.0, Venus=2.0, Mars=180.0)
    )
    priorities = [a.priority for a in aspects]
    assert priorities == sorted(priorities, reverse=True)
    assert len(aspects) >= 5


def test_no_aspects_for_single_body():
    assert calculate_aspects(_positions(Sun=10.0)) == []


def test_aspect_names():
    aspect = calculate_aspects(_positions(Sun=0.0, Moon=120.0))[0]
    assert aspect.name == "Sun-Moon trine"
    assert aspect.energy == "Sun trine Moon"
    assert aspect.to_dict()["name"] == "Sun-Moon trine"


def test_signature_rounds_to_tenth():
    assert aspect_signature(_positions(Sun=10.04, Moon=20.0)) == "Sun=10.0,Moon=20.0"
    assert aspect_signature(_positions(Sun=10.04)) == aspect_signature(_positions(Sun=10.01))
    assert aspect_signature(_positions(Sun=10.04)) != aspect_signature(_positions(Sun=10.06))


class TestAspectCache:
    def test_empty_map_returns_empty_list(self, clock):
        cache = AspectCache(ExpiringStore("aspects-test"))
        assert cache.get_aspects({}) == []
        assert len(cache.store) == 0

    def test_same_signature_computes_once(self, clock, monkeypatch):
        import astrocache.services.aspect_cache as aspect_cache

        calls = []
        real = aspect_cache.calculate_aspects

        def counting(positions):
            calls.append(positions)
            return real(positions)

        monkeypatch.setattr(aspect_cache, "calculate_aspects", counting)
        cache = AspectCache(ExpiringStore("aspects-test"))

        first = cache.get_aspects(_positions(Sun=0.0, Moon=90.02))
        second = cache.get_aspects(_positions(Sun=0.01, Moon=90.0))
        assert first == second
        assert len(calls) == 1

        clock.advance(3600)
        cache.get_aspects(_positions(Sun=0.0, Moon=90.02))
        assert len(calls) == 2

    def test_returned_list_is_a_copy(self, clock):
        cache = AspectCache(ExpiringStore("aspects-test"))
        positions = _positions(Sun=0.0, Moon=90.0)
        first = cache.get_aspects(positions)
        first.clear()
        assert len(cache.get_aspects(positions)) == 1

    def test_no_aspects_is_still_cached(self, clock):
        cache = AspectCache(ExpiringStore("aspects-test"))
        assert cache.get_aspects(_positions(Sun=0.0, Moon=150.0)) == []
        assert len(cache.store) == 1
