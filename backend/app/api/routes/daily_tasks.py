"""Daily task API routes."""
from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.schemas.daily_task import (
    DailyTaskCreateRequest,
    DailyTaskOwnerRequest,
    DailyTaskResetResponse,
    DailyTaskSummary,
)
from app.db.deps import get_db
from app.db.models.daily_task import DailyTask
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.daily_tasks import (
    check_and_reset_tasks,
    create_task,
    delete_task,
    list_incomplete_tasks,
    list_tasks,
    reset_all_tasks,
    toggle_task,
)

router = APIRouter()


@router.get("/daily-tasks", response_model=List[DailyTaskSummary], tags=["daily-tasks"])
def get_daily_tasks(
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the tasks"),
    db: Session = Depends(get_db),
) -> List[DailyTaskSummary]:
    """List a user's tasks, applying the daily reset first if it is still due."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace("daily_tasks.list", metadata={"route": "/daily-tasks"}, user_id=str(user_id), request_id=request_id):
        reset = check_and_reset_tasks(db, user_id)
        tasks = list_tasks(db, user_id)

    log_metric("daily_tasks.list.count", len(tasks), metadata={"reset": reset})
    return [_serialize(task) for task in tasks]


@router.get("/daily-tasks/incomplete", response_model=List[DailyTaskSummary], tags=["daily-tasks"])
def get_incomplete_daily_tasks(
    user_id: UUID = Query(..., description="User ID owning the tasks"),
    db: Session = Depends(get_db),
) -> List[DailyTaskSummary]:
    return [_serialize(task) for task in list_incomplete_tasks(db, user_id)]


@router.post(
    "/daily-tasks",
    response_model=DailyTaskSummary,
    status_code=status.HTTP_201_CREATED,
    tags=["daily-tasks"],
)
def create_daily_task(
    payload: DailyTaskCreateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> DailyTaskSummary:
    if not payload.title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title must not be blank")

    request_id = getattr(http_request.state, "request_id", None)
    with trace("daily_tasks.create", user_id=str(payload.user_id), request_id=request_id):
        task = create_task(db, payload.user_id, payload.title)
    log_metric("daily_tasks.create.success", 1)
    return _serialize(task)


@router.patch("/daily-tasks/{task_id}/toggle", response_model=DailyTaskSummary, tags=["daily-tasks"])
def toggle_daily_task(
    task_id: UUID,
    payload: DailyTaskOwnerRequest,
    db: Session = Depends(get_db),
) -> DailyTaskSummary:
    task = _get_owned_task(db, task_id, payload.user_id)
    return _serialize(toggle_task(db, task))


@router.delete("/daily-tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["daily-tasks"])
def delete_daily_task(
    task_id: UUID,
    user_id: UUID = Query(..., description="User ID owning the task"),
    db: Session = Depends(get_db),
) -> Response:
    task = _get_owned_task(db, task_id, user_id)
    delete_task(db, task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/daily-tasks/reset", response_model=DailyTaskResetResponse, tags=["daily-tasks"])
def reset_daily_tasks(
    payload: DailyTaskOwnerRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> DailyTaskResetResponse:
    """Force a reset regardless of whether one already happened today."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace("daily_tasks.reset", user_id=str(payload.user_id), request_id=request_id):
        count = reset_all_tasks(db, payload.user_id)
    return DailyTaskResetResponse(user_id=payload.user_id, tasks_reset=count, request_id=request_id or "")


def _get_owned_task(db: Session, task_id: UUID, user_id: UUID) -> DailyTask:
    task = db.get(DailyTask, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    if task.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Task does not belong to user")
    return task


def _serialize(task: DailyTask) -> DailyTaskSummary:
    return DailyTaskSummary(
        id=task.id,
        user_id=task.user_id,
        title=task.title,
        completed=bool(task.completed),
        completed_at=task.completed_at,
        last_reset_at=task.last_reset_at,
        created_at=task.created_at,
    )
