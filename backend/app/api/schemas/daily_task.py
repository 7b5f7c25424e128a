"""Schemas for daily task endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class DailyTaskSummary(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    completed: bool
    completed_at: Optional[datetime]
    last_reset_at: Optional[datetime]
    created_at: datetime


class DailyTaskCreateRequest(BaseModel):
    user_id: UUID
    title: str = Field(..., min_length=1, max_length=200)


class DailyTaskOwnerRequest(BaseModel):
    user_id: UUID


class DailyTaskResetResponse(BaseModel):
    user_id: UUID
    tasks_reset: int
    request_id: str
