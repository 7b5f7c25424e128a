"""Dedicated APScheduler worker process."""
from __future__ import annotations

import logging
import signal
import threading
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.context import job_context
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.services.job_runner import (
    JobRunResult,
    run_daily_reset_for_all_users,
    run_task_reminders_for_all_users,
    run_workout_previews_for_all_plans,
)


logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging(log_level=settings.log_level)
    logger.info("Scheduler worker starting (enabled=%s)", settings.scheduler_enabled)

    scheduler = BackgroundScheduler(timezone=settings.scheduler_timezone)

    if settings.scheduler_enabled:
        register_jobs(scheduler)
        scheduler.start()
        if settings.jobs_run_on_startup:
            logger.info("Running jobs once on startup")
            run_daily_reset_job()
            run_task_reminder_job()
            run_workout_preview_job()
    else:
        logger.warning("Scheduler disabled via config; worker will idle")

    stop_event = threading.Event()

    def shutdown(signum, frame):  # pragma: no cover - signal handler
        logger.info("Scheduler worker shutting down (signal=%s)", signum)
        if scheduler.running:
            scheduler.shutdown(wait=False)
        stop_event.set()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    try:
        stop_event.wait()
    except KeyboardInterrupt:  # pragma: no cover - manual stop
        shutdown(signal.SIGINT, None)


def register_jobs(scheduler: BackgroundScheduler) -> None:
    minute = settings.hourly_job_minute
    scheduler.add_job(
        run_task_reminder_job,
        trigger="cron",
        minute=minute,
        id="task_reminders_job",
        replace_existing=True,
    )
    scheduler.add_job(
        run_workout_preview_job,
        trigger="cron",
        minute=minute,
        id="workout_previews_job",
        replace_existing=True,
    )
    scheduler.add_job(
        run_daily_reset_job,
        trigger="cron",
        hour=0,
        minute=0,
        id="daily_reset_job",
        replace_existing=True,
    )
    logger.info(
        "Registered scheduler jobs (hourly at :%02d, reset at 00:00 %s)",
        minute,
        settings.scheduler_timezone,
    )


def run_task_reminder_job() -> None:
    _run_job("task_reminders", run_task_reminders_for_all_users)


def run_workout_preview_job() -> None:
    _run_job("workout_previews", run_workout_previews_for_all_plans)


def run_daily_reset_job() -> None:
    _run_job("daily_reset", run_daily_reset_for_all_users)


def _run_job(name: str, runner: Callable[[Session], JobRunResult]) -> None:
    with job_context(name):
        session = SessionLocal()
        try:
            result = runner(session)
            logger.info(
                "%s job complete: entities=%s, succeeded=%s, failed=%s",
                name,
                result.entities_processed,
                result.succeeded,
                result.failed,
            )
        except Exception:
            logger.exception("%s job failed", name)
        finally:
            session.close()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
