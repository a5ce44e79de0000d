#!/usr/bin/env python3
"""
Cache configuration
Frozen settings for the position, Moon and aspect caches
"""

import logging
import os

from dataclasses import dataclass

from astrocache.engine.constants import (
    ASPECT_CACHE_TTL,
    BOUNDARY_TTL_FACTOR,
    DEFAULT_LOCK_STRIPES,
    MAX_CACHE_ENTRIES,
    MOON_TTL_MAX_SECONDS,
    MOON_TTL_MIN_SECONDS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheConfig:
    """Configuration for the astronomical caches."""

    # Sizing
    max_entries: int = MAX_CACHE_ENTRIES  # Per-cache ceiling
    lock_stripes: int = DEFAULT_LOCK_STRIPES  # Per-key lock stripes

    # TTL policy
    aspect_ttl_seconds: int = ASPECT_CACHE_TTL
    moon_ttl_min_seconds: int = MOON_TTL_MIN_SECONDS
    moon_ttl_max_seconds: int = MOON_TTL_MAX_SECONDS
    boundary_ttl_factor: float = BOUNDARY_TTL_FACTOR

    # Ephemeris data files (None = built-in Moshier fallback)
    ephemeris_path: str | None = None

    @classmethod
    def from_env(cls, prefix: str = "ASTROCACHE_") -> "CacheConfig":
        """Create config from environment variables."""
        kwargs = {}

        env_mapping = {
            f"{prefix}MAX_ENTRIES": ("max_entries", int),
            f"{prefix}LOCK_STRIPES": ("lock_stripes", int),
            f"{prefix}ASPECT_TTL": ("aspect_ttl_seconds", int),
            f"{prefix}MOON_TTL_MIN": ("moon_ttl_min_seconds", int),
            f"{prefix}MOON_TTL_MAX": ("moon_ttl_max_seconds", int),
            f"{prefix}BOUNDARY_FACTOR": ("boundary_ttl_factor", float),
            f"{prefix}EPHE_PATH": ("ephemeris_path", str),
        }

        for env_var, (field_name, field_type) in env_mapping.items():
            value = os.environ.get(env_var)
            if value is not None:
                try:
                    kwargs[field_name] = field_type(value)
                    logger.info(f"Set {field_name} = {kwargs[field_name]} from {env_var}")
                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid value for {env_var}: {value} - {e}")

        return cls(**kwargs)

    @classmethod
    def production(cls) -> "CacheConfig":
        """Production configuration."""
        return cls()

    @classmethod
    def testing(cls) -> "CacheConfig":
        """Testing configuration with a small ceiling."""
        return cls(max_entries=50, lock_stripes=4)
