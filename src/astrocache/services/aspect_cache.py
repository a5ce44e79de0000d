"""
Aspect cache keyed by a 0.1° longitude signature, fixed TTL.
"""

from __future__ import annotations

from collections.abc import Mapping

from astrocache.engine.aspects import aspect_signature, calculate_aspects
from astrocache.engine.constants import ASPECT_CACHE_TTL
from astrocache.engine.core_types import Aspect, PlanetPosition

from .ttl_store import ExpiringStore


class AspectCache:
    def __init__(self, store: ExpiringStore, ttl_seconds: float = ASPECT_CACHE_TTL):
        self.store = store
        self.ttl_seconds = ttl_seconds

    def get_aspects(self, positions: Mapping[str, PlanetPosition]) -> list[Aspect]:
        """Aspects for the positions; identical rounded signatures share an entry.

        The cached list is returned as a copy so callers cannot alter it.
        """
        if not positions:
            return []

        key = f"aspects:{aspect_signature(positions)}"
        aspects = self.store.get_or_compute(
            key, lambda: (tuple(calculate_aspects(positions)), self.ttl_seconds)
        )
        return list(aspects)
