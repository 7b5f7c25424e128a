"""Workout plan ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class WorkoutPlan(Base):
    __tablename__ = "workout_plans"
    __table_args__ = (
        Index("ix_workout_plans_user_id", "user_id"),
        Index("ix_workout_plans_preview_hour", "telegram_preview_hour"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    # Free-form plan text as produced by the assistant; edited in place.
    plan_details = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=False, server_default=sa_text("false"))
    is_archived = Column(Boolean, nullable=False, default=False, server_default=sa_text("false"))
    telegram_preview_hour = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
