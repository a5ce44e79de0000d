"""Exception types raised by the position and illumination engine."""

from __future__ import annotations

from datetime import datetime


class AstroCacheError(Exception):
    """Base class for astrocache errors"""

    pass


class ComputationFailed(AstroCacheError):
    """Ephemeris provider rejected the instant or failed internally.

    Not retried: the computation is deterministic for a given instant.
    """

    def __init__(self, message: str, body: str | None = None, ts_utc: datetime | None = None):
        super().__init__(message)
        self.body = body
        self.ts_utc = ts_utc
