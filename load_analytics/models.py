from __future__ import annotations

import datetime as dt

from sqlalchemy import CheckConstraint, Date, DateTime, Float, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TrainingSessionRecord(Base):
    __tablename__ = "training_sessions"
    id: Mapped[int] = mapped_column(primary_key=True)
    athlete_id: Mapped[str] = mapped_column(String(64), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    session: Mapped[str] = mapped_column(String(2))
    training_type: Mapped[str] = mapped_column(String(40))
    rpe: Mapped[int] = mapped_column(Integer)
    duration: Mapped[float] = mapped_column(Float)
    unit_load: Mapped[float] = mapped_column(Float)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    __table_args__ = (
        UniqueConstraint("athlete_id", "date", "session", name="uq_training_session_slot"),
        CheckConstraint("rpe between 1 and 10"),
        CheckConstraint("duration >= 0"),
        CheckConstraint("session in ('AM', 'PM')"),
    )
