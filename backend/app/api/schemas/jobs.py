"""Schemas for job operations endpoints."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class JobRunRequest(BaseModel):
    job: Literal["task_reminders", "workout_previews", "daily_reset"]


class JobRunResponse(BaseModel):
    job: str
    entities_processed: int
    succeeded: int
    skipped: int
    failed: int
    request_id: str
