"""ACWR, compliance, monotony and strain.

ACWR bands (Gabbett 2016):
- 0.8 to 1.3 inclusive is the "sweet spot"
- 0.6 to 0.8, or above 1.3 up to 1.5 inclusive, is caution
- below 0.6 or above 1.5 is high risk

Monotony and strain follow Foster (1998), using the population standard
deviation of the 7 daily loads of one week.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from statistics import pstdev
from typing import Iterable

from load_analytics.services.load_aggregation import DailyLoadPoint
from load_analytics.services.week_window import DAYS_PER_WEEK, WeekWindow, require_valid_window

COMPLIANCE_DAYS = 28

SAFE_MIN = 0.8
SAFE_MAX = 1.3
CAUTION_MIN = 0.6
CAUTION_MAX = 1.5


class RiskBand(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    HIGH_RISK = "high_risk"


def compute_acwr(weekly_load: float, chronic_load: float) -> float:
    """Acute:chronic workload ratio; 0 when there is no chronic load."""
    if chronic_load > 0:
        return weekly_load / chronic_load
    return 0.0


def acwr_band(acwr: float) -> RiskBand:
    if SAFE_MIN <= acwr <= SAFE_MAX:
        return RiskBand.SAFE
    if CAUTION_MIN <= acwr < SAFE_MIN or SAFE_MAX < acwr <= CAUTION_MAX:
        return RiskBand.CAUTION
    return RiskBand.HIGH_RISK


def compute_compliance(session_dates: Iterable[date], ref_date: date) -> float:
    """Percentage of the 28 days ending on ref_date with at least one session."""
    start = ref_date - timedelta(days=COMPLIANCE_DAYS - 1)
    active = {d for d in session_dates if start <= d <= ref_date}
    return min(100.0, len(active) / COMPLIANCE_DAYS * 100)


@dataclass(frozen=True)
class WeeklySummary:
    """Aggregate statistics over the 7 daily loads of one week."""
    weekly_load: float
    mean_daily_load: float
    std_dev_daily_load: float
    training_monotony: float  # mean / stdev, 0 for a uniform week
    strain: float             # weekly load * monotony


def summarize_week(points: list[DailyLoadPoint], window: WeekWindow) -> WeeklySummary:
    """Weekly summary over exactly the 7 days of ``window``.

    ``points`` may cover more than the window; days of the window without a
    point count as 0.
    """
    require_valid_window(window)
    loads = {p.date: p.daily_load for p in points}
    daily = [loads.get(d, 0.0) for d in window.days()]

    total = sum(daily)
    mean_load = total / DAYS_PER_WEEK
    sd = pstdev(daily)
    monotony = mean_load / sd if sd > 0 else 0.0
    return WeeklySummary(
        weekly_load=total,
        mean_daily_load=mean_load,
        std_dev_daily_load=sd,
        training_monotony=monotony,
        strain=total * monotony,
    )


def overtraining_risk(monotony: float, strain: float) -> str:
    """Label a week from its ``WeeklySummary`` monotony and strain.

    Shown next to the weekly table. "high" needs both monotony >= 2.0 and
    strain >= 6000; either monotony >= 1.5 or strain >= 4000 is "moderate".
    A uniform week has monotony 0, so only its strain can raise the label.
    """
    if monotony >= 2.0 and strain >= 6000:
        return "high"
    if monotony >= 1.5 or strain >= 4000:
        return "moderate"
    return "low"
