from __future__ import annotations

import threading
import time

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pytest

from astrocache.services.eviction import evict_expired
from astrocache.services.ttl_store import ExpiringStore


@dataclass
class _Entry:
    expires_at: float


class TestEvictExpired:
    def test_noop_under_ceiling(self):
        entries = {"a": _Entry(0.0), "b": _Entry(0.0)}
        assert evict_expired(entries, max_entries=2, now=10.0) == 0
        assert len(entries) == 2

    def test_drops_expired_only_until_at_ceiling(self):
        entries = {f"k{i}": _Entry(5.0) for i in range(5)}
        entries["live"] = _Entry(50.0)
        removed = evict_expired(entries, max_entries=3, now=10.0)
        assert removed == 3
        assert len(entries) == 3
        assert "live" in entries

    def test_live_entries_are_never_evicted(self):
        entries = {f"k{i}": _Entry(50.0) for i in range(5)}
        assert evict_expired(entries, max_entries=3, now=10.0) == 0
        assert len(entries) == 5

    def test_expiry_boundary_is_inclusive(self):
        entries = {"a": _Entry(10.0), "b": _Entry(10.1)}
        assert evict_expired(entries, max_entries=1, now=10.0) == 1
        assert list(entries) == ["b"]


class TestExpiringStore:
    def test_get_put_and_expiry(self, clock):
        store = ExpiringStore("store-test")
        store.put("k", "v", ttl=10)
        assert store.get("k") == "v"

        clock.advance(10)
        assert store.get("k") is None
        assert len(store) == 0

    def test_recompute_replaces_entry(self, clock):
        store = ExpiringStore("store-test")
        first = store.put("k", "old", ttl=5)
        second = store.put("k", "new", ttl=5)
        assert first is not second
        assert first.value == "old"
        assert store.get("k") == "new"

    def test_get_or_compute_caches(self, clock):
        store = ExpiringStore("store-test")
        calls = []

        def compute():
            calls.append(1)
            return "value", 60

        assert store.get_or_compute("k", compute) == "value"
        assert store.get_or_compute("k", compute) == "value"
        assert len(calls) == 1

    def test_failed_compute_stores_nothing(self, clock):
        store = ExpiringStore("store-test")

        def compute():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            store.get_or_compute("k", compute)
        assert "k" not in store
        assert len(store) == 0

    def test_bounded_after_mass_expiry(self, clock):
        store = ExpiringStore("store-test", max_entries=1000)
        for i in range(1000):
            store.put(f"old-{i}", i, ttl=60)
        clock.advance(61)

        for i in range(250):
            store.put(f"new-{i}", i, ttl=60)
            assert len(store) <= 1000

        assert store.live_count() == 250
        assert store.get("new-0") == 0
        assert store.get("old-0") is None

    def test_live_entries_may_exceed_ceiling(self, clock):
        store = ExpiringStore("store-test", max_entries=10)
        for i in range(15):
            store.put(f"k{i}", i, ttl=60)
        assert len(store) == 15
        assert store.live_count() == 15

        clock.advance(61)
        store.put("fresh", 0, ttl=60)
        assert len(store) == 10

    def test_stats(self, clock):
        store = ExpiringStore("store-test", max_entries=5)
        store.get("missing")
        store.put("k", 1, ttl=60)
        store.get("k")
        stats = store.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["size"] == 1
        assert stats["max_entries"] == 5

        store.clear()
        assert store.get_stats()["size"] == 0
        assert store.get_stats()["hits"] == 0


class TestConcurrency:
    def test_same_key_computes_once(self):
        store = ExpiringStore("store-concurrency")
        calls = []
        lock = threading.Lock()

        def compute():
            with lock:
                calls.append(1)
            time.sleep(0.05)
            return object(), 60

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: store.get_or_compute("shared", compute), range(8)))

        assert len(calls) == 1
        assert all(r is results[0] for r in results)

    def test_different_stripes_compute_in_parallel(self):
        store = ExpiringStore("store-concurrency", lock_stripes=16)
        first = "key-0"
        second = next(
            f"key-{i}" for i in range(1, 1000) if store._stripe(f"key-{i}") is not store._stripe(first)
        )
        released = threading.Event()
        entered = threading.Event()

        def slow():
            entered.set()
            # Only finishes early if the other key was not blocked behind us
            return released.wait(timeout=2.0), 60

        def fast():
            released.set()
            return True, 60

        with ThreadPoolExecutor(max_workers=2) as pool:
            slow_result = pool.submit(store.get_or_compute, first, slow)
            assert entered.wait(timeout=2.0)
            fast_result = pool.submit(store.get_or_compute, second, fast)
            assert fast_result.result(timeout=2.0) is True
            assert slow_result.result(timeout=2.0) is True
