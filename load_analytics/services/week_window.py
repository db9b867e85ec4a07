"""Monday-to-Sunday reporting windows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from load_analytics.errors import InvalidWindowError

DAYS_PER_WEEK = 7
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def require_valid_window(window: "WeekWindow") -> None:
    """Raise InvalidWindowError unless window is a Monday-aligned 7-day span."""
    if window.end != window.start + timedelta(days=DAYS_PER_WEEK - 1):
        raise InvalidWindowError(f"window end {window.end} is not start {window.start} + 6 days")
    if window.start.weekday() != 0:
        raise InvalidWindowError(f"window start {window.start} is not a Monday")


@dataclass(frozen=True)
class WeekWindow:
    """A Monday-Sunday span, both ends inclusive."""

    start: date
    end: date

    def __post_init__(self) -> None:
        require_valid_window(self)

    @classmethod
    def containing(cls, day: date) -> WeekWindow:
        monday = day - timedelta(days=day.weekday())
        return cls(start=monday, end=monday + timedelta(days=DAYS_PER_WEEK - 1))

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def shift(self, weeks: int) -> WeekWindow:
        offset = timedelta(days=DAYS_PER_WEEK * weeks)
        return WeekWindow(start=self.start + offset, end=self.end + offset)
