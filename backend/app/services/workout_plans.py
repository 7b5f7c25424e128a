"""Plan store operations built on the plan-text helpers."""
from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.workout_plan import WorkoutPlan
from app.services.exercise_weight import rewrite_exercise_weight
from app.services.plan_text import DaySection, next_workout

logger = logging.getLogger(__name__)


def get_plan(db: Session, plan_id: UUID) -> Optional[WorkoutPlan]:
    return db.get(WorkoutPlan, plan_id)


def list_plans_due_for_preview(db: Session, hour: int) -> List[WorkoutPlan]:
    return (
        db.query(WorkoutPlan)
        .filter(
            WorkoutPlan.telegram_preview_hour == hour,
            WorkoutPlan.is_active.is_(True),
            WorkoutPlan.is_archived.is_(False),
        )
        .order_by(WorkoutPlan.created_at.asc())
        .all()
    )


def update_exercise_weight(db: Session, plan: WorkoutPlan, exercise_name: str, new_weight: str) -> bool:
    """Rewrite the weight of ``exercise_name`` in the plan text. Returns True if the text changed."""
    current = plan.plan_details or ""
    updated = rewrite_exercise_weight(current, exercise_name, new_weight)
    if updated == current:
        logger.info("No weight change for %r in plan %s", exercise_name, plan.id)
        return False

    plan.plan_details = updated
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return True


def next_workout_for_plan(plan: WorkoutPlan) -> Optional[DaySection]:
    return next_workout(plan.plan_details or "")
