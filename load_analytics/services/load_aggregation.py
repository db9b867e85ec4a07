"""Per-day and rolling-window sums of session unit load."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from load_analytics.services.sessions import TrainingSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyLoadPoint:
    date: date
    daily_load: float


def daily_load_series(
    sessions: Iterable[TrainingSession],
    date_from: date,
    date_to: date,
    athlete_id: str | None = None,
) -> list[DailyLoadPoint]:
    """Sum unit load per calendar day over ``[date_from, date_to]``.

    Every day in the interval gets a point, days without sessions carry 0.
    Sessions outside the interval, or for another athlete when
    ``athlete_id`` is given, are ignored.
    """
    if date_from > date_to:
        raise ValueError(f"date_from {date_from} is after date_to {date_to}")

    loads_by_date: dict[date, float] = {}
    for s in sessions:
        if athlete_id is not None and s.athlete_id != athlete_id:
            continue
        if date_from <= s.date <= date_to:
            loads_by_date[s.date] = loads_by_date.get(s.date, 0.0) + float(s.unit_load or 0)

    n_days = (date_to - date_from).days + 1
    series = [
        DailyLoadPoint(date=d, daily_load=loads_by_date.get(d, 0.0))
        for d in (date_from + timedelta(days=i) for i in range(n_days))
    ]
    logger.debug("daily_load_series", extra={"ctx_days": n_days, "ctx_active_days": len(loads_by_date)})
    return series


def load_on(series: list[DailyLoadPoint], day: date) -> float:
    """Load on a single day, 0 when the day is outside the series."""
    for p in series:
        if p.date == day:
            return p.daily_load
    return 0.0


def trailing_sum(series: list[DailyLoadPoint], ref_date: date, days: int = 7) -> float:
    """Sum of daily loads over the ``days`` days ending on ``ref_date`` inclusive."""
    start = ref_date - timedelta(days=days - 1)
    return sum(p.daily_load for p in series if start <= p.date <= ref_date)
