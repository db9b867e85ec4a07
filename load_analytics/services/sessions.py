"""Training-session value objects and the repositories that supply them.

The analytics engine only reads sessions. ``SessionRepository`` is the
narrow contract it consumes; ``SqlSessionRepository`` and
``InMemorySessionRepository`` are the two implementations shipped here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from load_analytics.db import get_session_factory
from load_analytics.errors import RepositoryError
from load_analytics.models import TrainingSessionRecord
from load_analytics.validators import TrainingSessionInput, compute_unit_load

logger = logging.getLogger(__name__)

SESSION_SLOTS = ("AM", "PM")


@dataclass(frozen=True)
class TrainingSession:
    """One logged training unit. ``unit_load`` is taken as given."""
    athlete_id: str
    date: date
    session: str  # "AM" | "PM"
    training_type: str
    rpe: int
    duration: float
    unit_load: float


def _slot_order(s: TrainingSession) -> tuple[date, int]:
    return (s.date, SESSION_SLOTS.index(s.session) if s.session in SESSION_SLOTS else len(SESSION_SLOTS))


def _from_record(row: TrainingSessionRecord) -> TrainingSession:
    return TrainingSession(
        athlete_id=row.athlete_id,
        date=row.date,
        session=row.session,
        training_type=row.training_type,
        rpe=int(row.rpe),
        duration=float(row.duration or 0),
        unit_load=float(row.unit_load or 0),
    )


class SessionRepository(ABC):
    """Source of training sessions for one athlete over a date range."""

    @abstractmethod
    def fetch_sessions(self, athlete_id: str, date_from: date, date_to: date) -> list[TrainingSession]:
        """Return sessions with ``date_from <= date <= date_to``, ordered by date then slot.

        Raises RepositoryError on transport or auth failure.
        """

    @abstractmethod
    def first_session_date(self, athlete_id: str, on_or_before: date) -> date | None:
        """Date of the athlete's earliest session up to ``on_or_before``, or None.

        Raises RepositoryError on transport or auth failure.
        """


class InMemorySessionRepository(SessionRepository):
    """Serves sessions from a list the caller already holds."""

    def __init__(self, sessions: Iterable[TrainingSession] = ()):
        self._sessions = list(sessions)

    def fetch_sessions(self, athlete_id: str, date_from: date, date_to: date) -> list[TrainingSession]:
        rows = [
            s for s in self._sessions
            if s.athlete_id == athlete_id and date_from <= s.date <= date_to
        ]
        return sorted(rows, key=_slot_order)

    def first_session_date(self, athlete_id: str, on_or_before: date) -> date | None:
        dates = [s.date for s in self._sessions if s.athlete_id == athlete_id and s.date <= on_or_before]
        return min(dates, default=None)


class SqlSessionRepository(SessionRepository):
    """Reads the ``training_sessions`` table through a SQLAlchemy session factory."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, url: str | None = None) -> SqlSessionRepository:
        """Repository on the cached engine for ``url`` (DATABASE_URL when omitted)."""
        return cls(get_session_factory(url))

    def fetch_sessions(self, athlete_id: str, date_from: date, date_to: date) -> list[TrainingSession]:
        stmt = (
            select(TrainingSessionRecord)
            .where(
                TrainingSessionRecord.athlete_id == athlete_id,
                TrainingSessionRecord.date >= date_from,
                TrainingSessionRecord.date <= date_to,
            )
            .order_by(TrainingSessionRecord.date, TrainingSessionRecord.session)
        )
        try:
            with self._session_factory() as s:
                rows = s.execute(stmt).scalars().all()
                sessions = [_from_record(r) for r in rows]
        except SQLAlchemyError as exc:
            logger.error(
                "session_fetch_failed",
                exc_info=True,
                extra={"ctx_athlete_id": athlete_id, "ctx_from": date_from, "ctx_to": date_to},
            )
            raise RepositoryError(f"failed to fetch sessions for athlete {athlete_id}", athlete_id=athlete_id) from exc
        logger.debug(
            "sessions_fetched",
            extra={"ctx_athlete_id": athlete_id, "ctx_count": len(sessions)},
        )
        return sessions

    def first_session_date(self, athlete_id: str, on_or_before: date) -> date | None:
        stmt = select(func.min(TrainingSessionRecord.date)).where(
            TrainingSessionRecord.athlete_id == athlete_id,
            TrainingSessionRecord.date <= on_or_before,
        )
        try:
            with self._session_factory() as s:
                return s.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("first_session_lookup_failed", exc_info=True, extra={"ctx_athlete_id": athlete_id})
            raise RepositoryError(f"failed to look up history for athlete {athlete_id}", athlete_id=athlete_id) from exc


def record_session(db: Session, data: TrainingSessionInput) -> TrainingSessionRecord:
    """Store a logged session, replacing any earlier entry in the same slot."""
    db.execute(
        delete(TrainingSessionRecord).where(
            TrainingSessionRecord.athlete_id == data.athlete_id,
            TrainingSessionRecord.date == data.date,
            TrainingSessionRecord.session == data.session,
        )
    )
    row = TrainingSessionRecord(
        athlete_id=data.athlete_id,
        date=data.date,
        session=data.session,
        training_type=data.training_type,
        rpe=data.rpe,
        duration=data.duration,
        unit_load=compute_unit_load(data.rpe, data.duration),
    )
    db.add(row)
    db.flush()
    logger.info(
        "training_session_recorded",
        extra={"ctx_athlete_id": row.athlete_id, "ctx_date": row.date, "ctx_session": row.session},
    )
    return row
