"""Helpers for working with users."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.user import User


def ensure_user(db: Session, user_id: UUID) -> User:
    """Return the user row, inserting a bare one (flushed, not committed) when the id is new."""
    user = db.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        db.add(user)
        db.flush()
    return user
