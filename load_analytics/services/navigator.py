"""Selection of the reporting week for one athlete.

The selected week is an explicit value: callers pass the current
``WeekWindow`` in and get the next one back.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from enum import Enum

from load_analytics.config import get_settings
from load_analytics.services.sessions import SessionRepository
from load_analytics.services.week_window import WeekWindow, require_valid_window

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"


class WeekWindowNavigator:
    """Steps between weeks, never forward into a week without sessions."""

    def __init__(self, repository: SessionRepository, athlete_id: str, lookback_days: int | None = None):
        self.repository = repository
        self.athlete_id = athlete_id
        self.lookback_days = lookback_days if lookback_days is not None else get_settings().initial_lookback_days

    def initial_window(self, today: date | None = None) -> WeekWindow:
        """Week of the latest session in the lookback period, else the week of today."""
        today = today or date.today()
        sessions = self.repository.fetch_sessions(
            self.athlete_id, today - timedelta(days=self.lookback_days), today
        )
        if not sessions:
            logger.info("initial_window_today", extra={"ctx_athlete_id": self.athlete_id})
            return WeekWindow.containing(today)
        latest = max(s.date for s in sessions)
        logger.info(
            "initial_window_latest_session",
            extra={"ctx_athlete_id": self.athlete_id, "ctx_latest": latest},
        )
        return WeekWindow.containing(latest)

    def has_sessions(self, window: WeekWindow) -> bool:
        return bool(self.repository.fetch_sessions(self.athlete_id, window.start, window.end))

    def next(self, window: WeekWindow) -> WeekWindow:
        require_valid_window(window)
        candidate = window.shift(1)
        if not self.has_sessions(candidate):
            logger.info(
                "navigate_next_blocked",
                extra={"ctx_athlete_id": self.athlete_id, "ctx_start": candidate.start},
            )
            return window
        return candidate

    def prev(self, window: WeekWindow) -> WeekWindow:
        require_valid_window(window)
        return window.shift(-1)

    def navigate(self, window: WeekWindow, direction: Direction | str) -> WeekWindow:
        direction = Direction(direction)
        if direction is Direction.NEXT:
            return self.next(window)
        return self.prev(window)
