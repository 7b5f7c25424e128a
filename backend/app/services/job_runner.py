"""Batch job runners for task reminders, workout previews and the daily reset."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Literal, Optional

from sqlalchemy.orm import Session

from app.core.clock import local_now, to_zone
from app.db.models.daily_task import DailyTask
from app.db.models.reminder_config import ReminderConfig
from app.db.models.workout_plan import WorkoutPlan
from app.observability.metrics import log_metric
from app.services.daily_tasks import check_and_reset_tasks, list_incomplete_tasks
from app.services.notifications.base import NotificationService
from app.services.notifications.factory import get_notification_service
from app.services.notifications.hooks import deliver
from app.services.notifications.messages import render_task_reminder, render_workout_preview
from app.services.plan_text import next_workout
from app.services.reminder_config import (
    effective_start_hour,
    get_reminder_config,
    list_reminder_configs,
    notification_target,
)
from app.services.reminder_schedule import evaluate_reminder
from app.services.workout_plans import list_plans_due_for_preview


logger = logging.getLogger(__name__)

OutcomeStatus = Literal["success", "skipped", "failed"]


@dataclass
class EntityOutcome:
    entity_id: Any
    status: OutcomeStatus
    reason: Optional[str] = None


@dataclass
class JobRunResult:
    job: str
    outcomes: List[EntityOutcome] = field(default_factory=list)

    @property
    def entities_processed(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return self._count("success")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)


def _isolated(
    db: Session,
    job: str,
    entity_id: Any,
    handler: Callable[[], EntityOutcome],
) -> EntityOutcome:
    try:
        return handler()
    except Exception:
        logger.exception("%s failed for %s", job, entity_id)
        db.rollback()
        return EntityOutcome(entity_id, "failed", "error")


def _finish(result: JobRunResult) -> JobRunResult:
    logger.info(
        "%s tick: processed=%s succeeded=%s skipped=%s failed=%s",
        result.job,
        result.entities_processed,
        result.succeeded,
        result.skipped,
        result.failed,
    )
    log_metric(f"jobs.{result.job}.succeeded", result.succeeded)
    log_metric(f"jobs.{result.job}.failed", result.failed)
    return result


def run_task_reminder_for_config(
    db: Session,
    config: ReminderConfig,
    *,
    now: datetime,
    service: NotificationService,
) -> EntityOutcome:
    user_id = config.user_id
    last_sent = to_zone(config.last_task_reminder_sent_at, now.tzinfo)
    skip_reason = evaluate_reminder(now, effective_start_hour(config), last_sent)
    if skip_reason:
        logger.debug("Reminder for user %s skipped: %s", user_id, skip_reason)
        return EntityOutcome(user_id, "skipped", skip_reason)

    tasks = list_incomplete_tasks(db, user_id)
    if not tasks:
        logger.info("No incomplete tasks for user %s, skipping reminder", user_id)
        return EntityOutcome(user_id, "skipped", "no_incomplete_tasks")

    text = render_task_reminder([task.title for task in tasks], now.hour)
    result = deliver(service, job_name="task_reminder", target=notification_target(config), text=text)
    if result.status == "skipped":
        return EntityOutcome(user_id, "skipped", result.reason)
    if not result.delivered:
        return EntityOutcome(user_id, "failed", result.reason)

    config.last_task_reminder_sent_at = now
    db.add(config)
    db.commit()
    logger.info("Sent task reminder to user %s with %s tasks", user_id, len(tasks))
    return EntityOutcome(user_id, "success")


def run_task_reminders_for_all_users(
    db: Session,
    *,
    now: Optional[datetime] = None,
    service: Optional[NotificationService] = None,
) -> JobRunResult:
    now = now or local_now()
    service = service or get_notification_service()
    result = JobRunResult(job="task_reminders")
    for config in list_reminder_configs(db):
        user_id = config.user_id
        result.outcomes.append(
            _isolated(
                db,
                result.job,
                user_id,
                lambda config=config: run_task_reminder_for_config(db, config, now=now, service=service),
            )
        )
    return _finish(result)


def run_workout_preview_for_plan(
    db: Session,
    plan: WorkoutPlan,
    *,
    service: NotificationService,
) -> EntityOutcome:
    plan_id = plan.id
    if not (plan.plan_details or "").strip():
        logger.warning("No plan details for plan %s", plan_id)
        return EntityOutcome(plan_id, "skipped", "empty_plan")

    workout = next_workout(plan.plan_details)
    if workout is None:
        logger.warning("No workouts found in plan %s", plan_id)
        return EntityOutcome(plan_id, "skipped", "no_workout_found")

    config = get_reminder_config(db, plan.user_id)
    if config is None:
        logger.warning("Plan %s owner %s has no reminder config", plan_id, plan.user_id)
        return EntityOutcome(plan_id, "skipped", "not_configured")

    text = render_workout_preview(plan.name, workout)
    result = deliver(service, job_name="workout_preview", target=notification_target(config), text=text)
    if result.status == "skipped":
        return EntityOutcome(plan_id, "skipped", result.reason)
    if not result.delivered:
        return EntityOutcome(plan_id, "failed", result.reason)

    logger.info("Sent workout preview for plan %s to user %s", plan_id, plan.user_id)
    return EntityOutcome(plan_id, "success")


def run_workout_previews_for_all_plans(
    db: Session,
    *,
    now: Optional[datetime] = None,
    service: Optional[NotificationService] = None,
) -> JobRunResult:
    now = now or local_now()
    service = service or get_notification_service()
    result = JobRunResult(job="workout_previews")
    for plan in list_plans_due_for_preview(db, now.hour):
        result.outcomes.append(
            _isolated(
                db,
                result.job,
                plan.id,
                lambda plan=plan: run_workout_preview_for_plan(db, plan, service=service),
            )
        )
    return _finish(result)


def run_daily_reset_for_all_users(db: Session, *, now: Optional[datetime] = None) -> JobRunResult:
    now = now or local_now()
    result = JobRunResult(job="daily_reset")
    user_ids = [row[0] for row in db.query(DailyTask.user_id).distinct().all()]
    for uid in user_ids:

        def reset(uid=uid) -> EntityOutcome:
            if check_and_reset_tasks(db, uid, now=now):
                return EntityOutcome(uid, "success")
            return EntityOutcome(uid, "skipped", "already_reset_today")

        result.outcomes.append(_isolated(db, result.job, uid, reset))
    return _finish(result)
