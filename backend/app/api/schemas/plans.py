"""Schemas for workout plan endpoints."""
from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, Field


class ExerciseWeightUpdateRequest(BaseModel):
    exercise_name: str = Field(..., min_length=1)
    # Must stay inside the weight column of a plan line.
    new_weight: str = Field(..., min_length=1, max_length=50, pattern=r"^[^|\r\n]*\S[^|\r\n]*$")


class ExerciseWeightUpdateResponse(BaseModel):
    plan_id: UUID
    changed: bool
    plan_details: str
    request_id: str


class NextWorkoutResponse(BaseModel):
    plan_id: UUID
    day: str
    exercises: List[str]
    request_id: str
