"""Reminder configuration routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from app.api.schemas.reminders import (
    ReminderConfigResponse,
    ReminderConfigUpdateRequest,
    ReminderScheduleResponse,
    ReminderSlot,
)
from app.db.deps import get_db
from app.db.models.reminder_config import ReminderConfig
from app.observability.tracing import trace
from app.services.reminder_config import effective_start_hour, get_reminder_config, upsert_reminder_config
from app.services.reminder_schedule import compute_reminder_schedule, urgency_tier

router = APIRouter()


@router.get("/reminders/config", response_model=ReminderConfigResponse, tags=["reminders"])
def read_reminder_config(
    request: Request,
    user_id: UUID = Query(...),
    db: Session = Depends(get_db),
) -> ReminderConfigResponse:
    config = get_reminder_config(db, user_id)
    if config is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder config not found")
    return _serialize(config, getattr(request.state, "request_id", None))


@router.put("/reminders/config", response_model=ReminderConfigResponse, tags=["reminders"])
def update_reminder_config(
    payload: ReminderConfigUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> ReminderConfigResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace(
        "reminders.config.update",
        metadata={"start_hour": payload.start_hour},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        config = upsert_reminder_config(
            db,
            payload.user_id,
            bot_token=payload.bot_token,
            chat_id=payload.chat_id,
            start_hour=payload.start_hour,
        )
    return _serialize(config, request_id)


@router.get("/reminders/schedule", response_model=ReminderScheduleResponse, tags=["reminders"])
def read_reminder_schedule(start_hour: int = Query(..., ge=0, le=23)) -> ReminderScheduleResponse:
    slots = [ReminderSlot(hour=hour, tier=urgency_tier(hour)) for hour in compute_reminder_schedule(start_hour)]
    return ReminderScheduleResponse(start_hour=start_hour, slots=slots)


def _serialize(config: ReminderConfig, request_id: str | None) -> ReminderConfigResponse:
    start_hour = effective_start_hour(config)
    return ReminderConfigResponse(
        user_id=config.user_id,
        chat_id=config.chat_id,
        bot_configured=bool(config.bot_token),
        start_hour=start_hour,
        last_task_reminder_sent_at=config.last_task_reminder_sent_at,
        schedule=compute_reminder_schedule(start_hour),
        request_id=request_id or "",
    )
