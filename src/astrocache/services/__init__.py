"""Caches and the cache service facade."""

from .cache_service import AstronomicalCacheService
from .ttl_store import CacheEntry, ExpiringStore

__all__ = ["AstronomicalCacheService", "CacheEntry", "ExpiringStore"]
