"""Schemas for reminder configuration endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ReminderConfigUpdateRequest(BaseModel):
    user_id: UUID
    bot_token: Optional[str] = None
    chat_id: Optional[str] = None
    start_hour: Optional[int] = Field(default=None, ge=0, le=23)


class ReminderConfigResponse(BaseModel):
    user_id: UUID
    chat_id: Optional[str]
    bot_configured: bool
    start_hour: int
    last_task_reminder_sent_at: Optional[datetime]
    schedule: List[int]
    request_id: str


class ReminderSlot(BaseModel):
    hour: int
    tier: str


class ReminderScheduleResponse(BaseModel):
    start_hour: int
    slots: List[ReminderSlot]
