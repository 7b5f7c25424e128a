"""Daily task store and the once-per-day reset policy."""
from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import asc
from sqlalchemy.orm import Session

from app.core.clock import local_now, to_zone
from app.db.models.daily_task import DailyTask
from app.services.user_service import ensure_user

logger = logging.getLogger(__name__)


def list_tasks(db: Session, user_id: UUID) -> List[DailyTask]:
    return (
        db.query(DailyTask)
        .filter(DailyTask.user_id == user_id)
        .order_by(asc(DailyTask.created_at), asc(DailyTask.title))
        .all()
    )


def list_incomplete_tasks(db: Session, user_id: UUID) -> List[DailyTask]:
    return (
        db.query(DailyTask)
        .filter(DailyTask.user_id == user_id, DailyTask.completed.is_(False))
        .order_by(asc(DailyTask.created_at), asc(DailyTask.title))
        .all()
    )


def create_task(db: Session, user_id: UUID, title: str, *, now: Optional[datetime] = None) -> DailyTask:
    now = now or local_now()
    ensure_user(db, user_id)
    # Existing tasks get today's reset before the new one marks the day as done.
    check_and_reset_tasks(db, user_id, now=now)
    # Counts as reset today, otherwise the next lazy check would undo a same-day completion.
    task = DailyTask(user_id=user_id, title=title.strip(), completed=False, last_reset_at=now)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def toggle_task(db: Session, task: DailyTask, *, now: Optional[datetime] = None) -> DailyTask:
    task.completed = not task.completed
    task.completed_at = (now or local_now()) if task.completed else None
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: DailyTask) -> None:
    db.delete(task)
    db.commit()


def is_reset_due(tasks: Iterable[DailyTask], today: date, tz: Optional[tzinfo] = None) -> bool:
    """True unless some task was already reset on ``today`` (calendar day in ``tz``)."""
    for task in tasks:
        last_reset = to_zone(task.last_reset_at, tz)
        if last_reset is not None and last_reset.date() == today:
            return False
    return True


def reset_tasks(tasks: Sequence[DailyTask], now: datetime) -> int:
    """Mark every task incomplete and stamp the reset time. The caller commits."""
    for task in tasks:
        task.completed = False
        task.completed_at = None
        task.last_reset_at = now
    return len(tasks)


def reset_all_tasks(db: Session, user_id: UUID, *, now: Optional[datetime] = None) -> int:
    now = now or local_now()
    tasks = list_tasks(db, user_id)
    count = reset_tasks(tasks, now)
    db.add_all(tasks)
    db.commit()
    return count


def check_and_reset_tasks(db: Session, user_id: UUID, *, now: Optional[datetime] = None) -> bool:
    """Reset the user's tasks if that has not happened yet today. Returns True on reset."""
    now = now or local_now()
    tasks = list_tasks(db, user_id)
    if not tasks:
        return False
    if not is_reset_due(tasks, now.date(), now.tzinfo):
        return False

    count = reset_tasks(tasks, now)
    db.add_all(tasks)
    db.commit()
    logger.info("Reset %s daily tasks for user %s", count, user_id)
    return True
