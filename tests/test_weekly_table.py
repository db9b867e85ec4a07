"""Tests for the AM/PM weekly load table."""

from __future__ import annotations

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from load_analytics.errors import InvalidWindowError
from load_analytics.services.sessions import TrainingSession
from load_analytics.services.week_window import WeekWindow
from load_analytics.services.weekly_table import SlotEntry, compute_weekly_table

WEEK = WeekWindow.containing(date(2026, 2, 23))


def _session(day: date, slot: str, rpe: int = 5, duration: float = 60) -> TrainingSession:
    return TrainingSession(
        athlete_id="a1", date=day, session=slot, training_type="technical_tactical",
        rpe=rpe, duration=duration, unit_load=rpe * duration,
    )


def test_all_fourteen_slots_present_when_empty():
    table = compute_weekly_table([], WEEK)
    assert len(table.days) == 7
    assert [d.day_name for d in table.days][0] == "Monday"
    assert [d.day_name for d in table.days][-1] == "Sunday"
    for day in table.days:
        assert set(day.slots) == {"AM", "PM"}
        assert all(slot == SlotEntry() for slot in day.slots.values())
        assert all(slot.is_empty for slot in day.slots.values())
        assert day.daily_load == 0
    assert table.summary.weekly_load == 0
    assert table.summary.training_monotony == 0


def test_slots_filled_from_sessions():
    sessions = [
        _session(WEEK.start, "AM", rpe=6, duration=60),
        _session(WEEK.start, "PM", rpe=4, duration=30),
        _session(WEEK.start + timedelta(days=2), "PM", rpe=8, duration=90),
    ]
    table = compute_weekly_table(sessions, WEEK)
    monday = table.days[0]
    assert monday.slots["AM"].unit_load == 360
    assert monday.slots["AM"].rpe == 6
    assert monday.slots["PM"].duration == 30
    assert monday.daily_load == 480
    wednesday = table.days[2]
    assert wednesday.slots["AM"].is_empty
    assert wednesday.slots["AM"].rpe is None
    assert wednesday.slots["PM"].training_type == "technical_tactical"
    assert table.summary.weekly_load == 480 + 720


def test_sessions_outside_window_excluded():
    sessions = [_session(WEEK.start - timedelta(days=1), "AM"), _session(WEEK.end + timedelta(days=1), "PM")]
    table = compute_weekly_table(sessions, WEEK)
    assert table.summary.weekly_load == 0


def test_duplicate_slot_shows_last_and_sums_load():
    sessions = [_session(WEEK.start, "AM", rpe=5, duration=60), _session(WEEK.start, "AM", rpe=7, duration=60)]
    table = compute_weekly_table(sessions, WEEK)
    assert table.days[0].slots["AM"].rpe == 7
    assert table.days[0].daily_load == 300 + 420


def test_weekday_week_is_moderate_risk():
    sessions = [_session(WEEK.start + timedelta(days=i), "AM", rpe=5, duration=20) for i in range(5)]
    table = compute_weekly_table(sessions, WEEK)
    assert table.summary.weekly_load == 500
    assert table.summary.training_monotony == pytest.approx(1.58, abs=0.01)
    assert table.overtraining_risk == "moderate"


def test_single_heavy_day_is_low_risk():
    table = compute_weekly_table([_session(WEEK.start, "AM", rpe=7, duration=100)], WEEK)
    assert table.summary.training_monotony < 1.5
    assert table.overtraining_risk == "low"


def test_heavy_uniform_training_is_high_risk():
    sessions = [_session(WEEK.start + timedelta(days=i), "AM", rpe=10, duration=100) for i in range(6)]
    sessions.append(_session(WEEK.end, "AM", rpe=10, duration=50))
    table = compute_weekly_table(sessions, WEEK)
    assert table.summary.weekly_load == 6500
    assert table.summary.training_monotony >= 2.0
    assert table.overtraining_risk == "high"


def test_invalid_window_rejected():
    with pytest.raises(InvalidWindowError):
        compute_weekly_table([], SimpleNamespace(start=WEEK.start, end=WEEK.end - timedelta(days=1)))
