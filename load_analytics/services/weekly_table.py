"""The AM/PM by weekday table for one week, with its summary statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from load_analytics.services.load_aggregation import daily_load_series
from load_analytics.services.risk_metrics import WeeklySummary, overtraining_risk, summarize_week
from load_analytics.services.sessions import SESSION_SLOTS, TrainingSession
from load_analytics.services.week_window import DAY_NAMES, WeekWindow, require_valid_window


@dataclass(frozen=True)
class SlotEntry:
    """One AM or PM cell; every field is None when nothing was logged."""
    training_type: str | None = None
    rpe: int | None = None
    duration: float | None = None
    unit_load: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.unit_load is None


@dataclass(frozen=True)
class DayRow:
    date: date
    day_name: str
    slots: dict[str, SlotEntry]
    daily_load: float


@dataclass(frozen=True)
class WeeklyTable:
    window: WeekWindow
    days: list[DayRow]
    summary: WeeklySummary
    overtraining_risk: str


def compute_weekly_table(sessions: Iterable[TrainingSession], window: WeekWindow) -> WeeklyTable:
    """Build the 7 x 2 slot table and weekly summary for ``window``.

    All 14 slots are present. When more than one session lands in a slot the
    later one is shown, while the day's load still counts every session.
    """
    require_valid_window(window)
    in_window = [s for s in sessions if window.contains(s.date)]

    cells: dict[tuple[date, str], SlotEntry] = {}
    for s in in_window:
        if s.session in SESSION_SLOTS:
            cells[(s.date, s.session)] = SlotEntry(
                training_type=s.training_type,
                rpe=s.rpe,
                duration=s.duration,
                unit_load=s.unit_load,
            )

    series = daily_load_series(in_window, window.start, window.end)
    days = [
        DayRow(
            date=p.date,
            day_name=DAY_NAMES[i],
            slots={slot: cells.get((p.date, slot), SlotEntry()) for slot in SESSION_SLOTS},
            daily_load=p.daily_load,
        )
        for i, p in enumerate(series)
    ]
    summary = summarize_week(series, window)
    return WeeklyTable(
        window=window,
        days=days,
        summary=summary,
        overtraining_risk=overtraining_risk(summary.training_monotony, summary.strain),
    )
