"""
Bounded eviction policy shared by all caches.

Expiry-first and LRU-agnostic: when a store is over its ceiling, expired
entries are dropped until it is back under. Live entries are never evicted,
so a store full of live data may stay over the ceiling until they expire.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any


def evict_expired(entries: MutableMapping[str, Any], max_entries: int, now: float) -> int:
    """Drop expired entries while ``entries`` exceeds ``max_entries``.

    Entries must expose ``expires_at`` on the same clock as ``now``. The
    scan stops as soon as the store is back at the ceiling.

    Returns:
        Number of entries removed
    """
    if len(entries) <= max_entries:
        return 0

    removed = 0
    for key, entry in list(entries.items()):
        if entry.expires_at <= now:
            del entries[key]
            removed += 1
            if len(entries) <= max_entries:
                break
    return removed
