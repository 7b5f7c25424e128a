"""Operational endpoints for scheduler jobs."""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.api.schemas.jobs import JobRunRequest, JobRunResponse
from app.core.config import settings
from app.db.deps import get_db
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.job_runner import (
    run_daily_reset_for_all_users,
    run_task_reminders_for_all_users,
    run_workout_previews_for_all_plans,
)

router = APIRouter()

JOB_RUNNERS = {
    "task_reminders": run_task_reminders_for_all_users,
    "workout_previews": run_workout_previews_for_all_plans,
    "daily_reset": run_daily_reset_for_all_users,
}


@router.get("/jobs", tags=["jobs"])
def get_jobs_config(request: Request) -> dict:
    request_id = getattr(request.state, "request_id", None)
    return {
        "scheduler_enabled": settings.scheduler_enabled,
        "schedule": {
            "timezone": settings.scheduler_timezone,
            "task_reminders": f"hourly at :{settings.hourly_job_minute:02d}",
            "workout_previews": f"hourly at :{settings.hourly_job_minute:02d}",
            "daily_reset": "daily at 00:00",
        },
        "request_id": request_id or "",
    }


@router.post("/jobs/run-now", response_model=JobRunResponse, tags=["jobs"])
def run_job_now(
    request: Request,
    payload: JobRunRequest,
    db: Session = Depends(get_db),
) -> JobRunResponse:
    if not settings.debug:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Run-now only allowed in debug mode")

    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()
    with trace("jobs.run_now", metadata={"job": payload.job}, request_id=request_id):
        result = JOB_RUNNERS[payload.job](db)

    log_metric("jobs.run_now.latency_ms", (perf_counter() - start) * 1000, metadata={"job": payload.job})
    return JobRunResponse(
        job=result.job,
        entities_processed=result.entities_processed,
        succeeded=result.succeeded,
        skipped=result.skipped,
        failed=result.failed,
        request_id=request_id or "",
    )
