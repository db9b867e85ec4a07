"""Pydantic validation models for the session logging workflow."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, field_validator

TRAINING_TYPES: dict[str, str] = {
    "regenerative": "Regenerative",
    "interval_metabolic": "Interval Metabolic",
    "technical_tactical": "Technical/Tactical",
    "strength_power": "Strength/Power",
    "speed_agility": "Speed/Agility",
    "mobility_regenerative": "Mobility & Regenerative",
    "competition": "Competition",
    "injury_prevention": "Injury Prevention",
    "other_activity": "Other Activity",
    "travel": "Travel",
}


class TrainingSessionInput(BaseModel):
    athlete_id: str = Field(min_length=1, max_length=64)
    date: dt.date
    session: str
    training_type: str
    rpe: int = Field(ge=1, le=10)
    duration: float = Field(ge=0)

    @field_validator("session")
    @classmethod
    def valid_session(cls, v):
        allowed = {"AM", "PM"}
        if v not in allowed:
            raise ValueError(f"session must be one of {allowed}")
        return v

    @field_validator("training_type")
    @classmethod
    def valid_training_type(cls, v):
        if v not in TRAINING_TYPES:
            raise ValueError(f"training_type must be one of {sorted(TRAINING_TYPES)}")
        return v


def compute_unit_load(rpe: int, duration: float) -> float:
    """Session-RPE load (Foster method): RPE * duration in minutes."""
    return float(rpe) * float(duration)
