"""Tests for the SQL and in-memory session repositories."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from load_analytics.db import db_session
from load_analytics.errors import RepositoryError
from load_analytics.models import Base, TrainingSessionRecord
from load_analytics.services.sessions import (
    InMemorySessionRepository,
    SqlSessionRepository,
    TrainingSession,
    record_session,
)
from load_analytics.validators import TrainingSessionInput


@pytest.fixture
def factory():
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


def _input(day: date, slot: str = "AM", rpe: int = 6, duration: float = 60, athlete_id: str = "a1") -> TrainingSessionInput:
    return TrainingSessionInput(
        athlete_id=athlete_id, date=day, session=slot, training_type="speed_agility",
        rpe=rpe, duration=duration,
    )


def test_record_and_fetch(factory):
    with db_session(factory) as s:
        record_session(s, _input(date(2026, 2, 10), "PM", rpe=7, duration=45))
        record_session(s, _input(date(2026, 2, 10), "AM"))
        record_session(s, _input(date(2026, 2, 3)))
        record_session(s, _input(date(2026, 2, 12), athlete_id="a2"))

    sessions = SqlSessionRepository(factory).fetch_sessions("a1", date(2026, 2, 1), date(2026, 2, 28))
    assert [(x.date, x.session) for x in sessions] == [
        (date(2026, 2, 3), "AM"),
        (date(2026, 2, 10), "AM"),
        (date(2026, 2, 10), "PM"),
    ]
    assert sessions[2].unit_load == 315.0
    assert isinstance(sessions[0], TrainingSession)


def test_fetch_range_inclusive(factory):
    with db_session(factory) as s:
        for day in (date(2026, 2, 1), date(2026, 2, 7), date(2026, 2, 8)):
            record_session(s, _input(day))
    sessions = SqlSessionRepository(factory).fetch_sessions("a1", date(2026, 2, 1), date(2026, 2, 7))
    assert [x.date for x in sessions] == [date(2026, 2, 1), date(2026, 2, 7)]


def test_record_replaces_same_slot(factory):
    with db_session(factory) as s:
        record_session(s, _input(date(2026, 2, 10), rpe=4, duration=30))
    with db_session(factory) as s:
        record_session(s, _input(date(2026, 2, 10), rpe=8, duration=90))
    with db_session(factory) as s:
        rows = s.execute(select(TrainingSessionRecord)).scalars().all()
        assert len(rows) == 1
        assert rows[0].unit_load == 720.0


def test_db_session_rolls_back_on_error(factory):
    with pytest.raises(RuntimeError):
        with db_session(factory) as s:
            record_session(s, _input(date(2026, 2, 10)))
            raise RuntimeError("abort")
    assert SqlSessionRepository(factory).fetch_sessions("a1", date(2026, 2, 1), date(2026, 2, 28)) == []


def test_sql_failure_becomes_repository_error():
    engine = create_engine("sqlite+pysqlite:///:memory:")  # no tables
    repo = SqlSessionRepository(sessionmaker(bind=engine))
    with pytest.raises(RepositoryError) as excinfo:
        repo.fetch_sessions("a1", date(2026, 2, 1), date(2026, 2, 28))
    assert excinfo.value.athlete_id == "a1"
    assert excinfo.value.__cause__ is not None


def test_in_memory_filters_and_orders():
    def make(day, slot, athlete_id="a1"):
        return TrainingSession(athlete_id, day, slot, "travel", 3, 20, 60)

    repo = InMemorySessionRepository([
        make(date(2026, 2, 10), "PM"),
        make(date(2026, 2, 10), "AM"),
        make(date(2026, 2, 9), "PM", athlete_id="a2"),
        make(date(2026, 3, 10), "AM"),
    ])
    sessions = repo.fetch_sessions("a1", date(2026, 2, 1), date(2026, 2, 28))
    assert [x.session for x in sessions] == ["AM", "PM"]


def test_from_url_uses_cached_engine():
    from load_analytics.db import get_engine

    url = "sqlite+pysqlite:///:memory:"
    Base.metadata.create_all(get_engine(url))
    repo = SqlSessionRepository.from_url(url)
    with db_session(repo._session_factory) as s:
        record_session(s, _input(date(2026, 2, 10)))
    assert len(repo.fetch_sessions("a1", date(2026, 2, 10), date(2026, 2, 10))) == 1


def test_first_session_date(factory):
    with db_session(factory) as s:
        record_session(s, _input(date(2026, 1, 20), athlete_id="a2"))
        record_session(s, _input(date(2026, 2, 3)))
        record_session(s, _input(date(2026, 2, 10)))
    repo = SqlSessionRepository(factory)
    assert repo.first_session_date("a1", date(2026, 2, 28)) == date(2026, 2, 3)
    assert repo.first_session_date("a1", date(2026, 2, 1)) is None
    assert repo.first_session_date("a3", date(2026, 2, 28)) is None


def test_first_session_date_failure_becomes_repository_error():
    engine = create_engine("sqlite+pysqlite:///:memory:")  # no tables
    repo = SqlSessionRepository(sessionmaker(bind=engine))
    with pytest.raises(RepositoryError):
        repo.first_session_date("a1", date(2026, 2, 28))


def test_in_memory_first_session_date():
    repo = InMemorySessionRepository([
        TrainingSession("a1", date(2026, 2, 10), "AM", "travel", 3, 20, 60),
        TrainingSession("a1", date(2026, 3, 10), "AM", "travel", 3, 20, 60),
    ])
    assert repo.first_session_date("a1", date(2026, 3, 31)) == date(2026, 2, 10)
    assert repo.first_session_date("a1", date(2026, 2, 9)) is None
