"""Reminder configuration store."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy import asc
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.reminder_config import ReminderConfig
from app.services.notifications.base import NotificationTarget
from app.services.user_service import ensure_user


def get_reminder_config(db: Session, user_id: UUID) -> Optional[ReminderConfig]:
    return db.query(ReminderConfig).filter(ReminderConfig.user_id == user_id).one_or_none()


def list_reminder_configs(db: Session) -> List[ReminderConfig]:
    return db.query(ReminderConfig).order_by(asc(ReminderConfig.created_at)).all()


def upsert_reminder_config(
    db: Session,
    user_id: UUID,
    *,
    bot_token: Optional[str],
    chat_id: Optional[str],
    start_hour: Optional[int] = None,
) -> ReminderConfig:
    config = get_reminder_config(db, user_id)
    if config is None:
        ensure_user(db, user_id)
        config = ReminderConfig(user_id=user_id, daily_tasks_start_hour=settings.default_start_hour)

    config.bot_token = bot_token
    config.chat_id = chat_id
    if start_hour is not None:
        config.daily_tasks_start_hour = start_hour

    db.add(config)
    db.commit()
    db.refresh(config)
    return config


def effective_start_hour(config: ReminderConfig) -> int:
    if config.daily_tasks_start_hour is None:
        return settings.default_start_hour
    return config.daily_tasks_start_hour


def notification_target(config: ReminderConfig) -> NotificationTarget:
    return NotificationTarget(user_id=config.user_id, chat_id=config.chat_id, bot_token=config.bot_token)
