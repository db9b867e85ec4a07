"""Exceptions raised by the load analytics engine.

Zero chronic load and zero daily-load variance are not errors; the
calculators return 0 for them.
"""

from __future__ import annotations


class LoadAnalyticsError(Exception):
    """Base class for engine errors."""


class RepositoryError(LoadAnalyticsError):
    """The session store failed or was unreachable.

    Never retried or masked by the engine; the whole report fails.
    """

    def __init__(self, message: str, athlete_id: str | None = None):
        super().__init__(message)
        self.athlete_id = athlete_id


class InvalidWindowError(LoadAnalyticsError, ValueError):
    """A week window that is not a Monday-aligned 7-day span."""
