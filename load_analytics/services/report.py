"""Weekly ACWR / compliance trend for an athlete.

One point per week, keyed by the week's end date, for the trailing
``report_weeks`` weeks ending at the selected window. Sessions are
fetched once for the whole interval the oldest point needs and every
point is derived from that single in-memory series.

Chronic load only averages the weeks since the athlete's first logged
session, so a new athlete is compared against the weeks they actually
trained rather than against zero-load weeks before they started.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Iterable

import pandas as pd

from load_analytics.config import get_settings
from load_analytics.services.chronic_baseline import CHRONIC_WEEKS, chronic_load
from load_analytics.services.load_aggregation import DailyLoadPoint, daily_load_series, load_on, trailing_sum
from load_analytics.services.risk_metrics import (
    COMPLIANCE_DAYS,
    RiskBand,
    acwr_band,
    compute_acwr,
    compute_compliance,
)
from load_analytics.services.sessions import SessionRepository, TrainingSession
from load_analytics.services.week_window import DAYS_PER_WEEK, WeekWindow, require_valid_window

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["date", "daily_load", "weekly_load", "chronic_load", "acwr", "compliance", "band"]


@dataclass(frozen=True)
class LoadReportPoint:
    date: date
    daily_load: float
    weekly_load: float
    chronic_load: float
    acwr: float
    compliance: float

    @property
    def band(self) -> RiskBand:
        return acwr_band(self.acwr)


@dataclass(frozen=True)
class LoadReport:
    athlete_id: str | None
    window: WeekWindow
    points: tuple[LoadReportPoint, ...]

    @property
    def current(self) -> LoadReportPoint | None:
        """The point for the selected week (keyed by its end date)."""
        for p in self.points:
            if p.date == self.window.end:
                return p
        return None

    def to_frame(self) -> pd.DataFrame:
        """Points as a DataFrame for chart rendering, ascending by date."""
        if not self.points:
            return pd.DataFrame(columns=REPORT_COLUMNS)
        rows = [{**asdict(p), "band": p.band.value} for p in self.points]
        df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
        df["date"] = pd.to_datetime(df["date"])
        return df


def report_interval(window: WeekWindow, weeks: int) -> tuple[date, date]:
    """Date range that covers the full history of every point in the report."""
    oldest_ref = window.end - timedelta(days=DAYS_PER_WEEK * (weeks - 1))
    history_days = max(COMPLIANCE_DAYS, DAYS_PER_WEEK * CHRONIC_WEEKS)
    return oldest_ref - timedelta(days=history_days - 1), window.end


def _report_point(
    series: list[DailyLoadPoint],
    session_dates: list[date],
    ref_date: date,
    history_start: date | None,
) -> LoadReportPoint:
    weekly = trailing_sum(series, ref_date, DAYS_PER_WEEK)
    chronic = chronic_load(series, ref_date, history_start)
    return LoadReportPoint(
        date=ref_date,
        daily_load=load_on(series, ref_date),
        weekly_load=weekly,
        chronic_load=chronic,
        acwr=compute_acwr(weekly, chronic),
        compliance=compute_compliance(session_dates, ref_date),
    )


def build_load_report(
    sessions: Iterable[TrainingSession],
    window: WeekWindow,
    weeks: int = 5,
    athlete_id: str | None = None,
    history_start: date | None = None,
) -> LoadReport:
    """Pure report computation over sessions already in memory.

    ``history_start`` is the athlete's first session date; weekly blocks
    before it are left out of chronic load. With None every block in the
    fetched interval counts.
    """
    require_valid_window(window)
    if weeks < 1:
        raise ValueError("weeks must be >= 1")
    date_from, date_to = report_interval(window, weeks)
    relevant = [
        s for s in sessions
        if date_from <= s.date <= date_to and (athlete_id is None or s.athlete_id == athlete_id)
    ]
    series = daily_load_series(relevant, date_from, date_to)
    session_dates = [s.date for s in relevant]

    points = [
        _report_point(series, session_dates, window.end - timedelta(days=DAYS_PER_WEEK * i), history_start)
        for i in range(weeks)
    ]
    points.sort(key=lambda p: p.date)
    return LoadReport(athlete_id=athlete_id, window=window, points=tuple(points))


class ReportAssembler:
    """Fetches an athlete's sessions once and assembles the load report."""

    def __init__(self, repository: SessionRepository, report_weeks: int | None = None):
        self.repository = repository
        self.report_weeks = report_weeks if report_weeks is not None else get_settings().report_weeks

    def compute_load_report(self, athlete_id: str, window: WeekWindow) -> LoadReport:
        require_valid_window(window)
        date_from, date_to = report_interval(window, self.report_weeks)
        # RepositoryError propagates unchanged; no partial report is returned.
        sessions = self.repository.fetch_sessions(athlete_id, date_from, date_to)
        history_start = self.repository.first_session_date(athlete_id, window.end)
        report = build_load_report(
            sessions, window, self.report_weeks, athlete_id=athlete_id, history_start=history_start
        )
        current = report.current
        logger.info(
            "load_report_computed",
            extra={
                "ctx_athlete_id": athlete_id,
                "ctx_window_end": window.end,
                "ctx_sessions": len(sessions),
                "ctx_history_start": history_start,
                "ctx_acwr": current.acwr if current else None,
            },
        )
        return report

    def compute_team_reports(self, athlete_ids: Iterable[str], window: WeekWindow) -> dict[str, LoadReport]:
        """Independent reports per athlete; any repository failure fails the call."""
        return {athlete_id: self.compute_load_report(athlete_id, window) for athlete_id in athlete_ids}
