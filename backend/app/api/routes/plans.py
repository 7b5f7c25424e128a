"""Workout plan text routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.api.schemas.plans import (
    ExerciseWeightUpdateRequest,
    ExerciseWeightUpdateResponse,
    NextWorkoutResponse,
)
from app.db.deps import get_db
from app.db.models.workout_plan import WorkoutPlan
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.workout_plans import get_plan, next_workout_for_plan, update_exercise_weight

router = APIRouter()


@router.post(
    "/plans/{plan_id}/exercise-weight",
    response_model=ExerciseWeightUpdateResponse,
    tags=["plans"],
)
def update_plan_exercise_weight(
    plan_id: UUID,
    payload: ExerciseWeightUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> ExerciseWeightUpdateResponse:
    """Change one exercise's weight in the stored plan text, leaving everything else as written."""
    plan = _require_plan(db, plan_id)
    request_id = getattr(request.state, "request_id", None)
    with trace(
        "plans.exercise_weight.update",
        metadata={"plan_id": str(plan_id), "exercise": payload.exercise_name},
        user_id=str(plan.user_id),
        request_id=request_id,
    ):
        changed = update_exercise_weight(db, plan, payload.exercise_name, payload.new_weight)

    log_metric("plans.exercise_weight.changed" if changed else "plans.exercise_weight.noop", 1)
    return ExerciseWeightUpdateResponse(
        plan_id=plan.id,
        changed=changed,
        plan_details=plan.plan_details or "",
        request_id=request_id or "",
    )


@router.get("/plans/{plan_id}/next-workout", response_model=NextWorkoutResponse, tags=["plans"])
def read_next_workout(
    plan_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> NextWorkoutResponse:
    plan = _require_plan(db, plan_id)
    workout = next_workout_for_plan(plan)
    if workout is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No workout found in plan")
    return NextWorkoutResponse(
        plan_id=plan.id,
        day=workout.label,
        exercises=list(workout.exercises),
        request_id=getattr(request.state, "request_id", None) or "",
    )


def _require_plan(db: Session, plan_id: UUID) -> WorkoutPlan:
    plan = get_plan(db, plan_id)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    return plan
