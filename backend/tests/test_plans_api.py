from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.deps import get_db
from app.db.models.user import User
from app.db.models.workout_plan import WorkoutPlan
from app.main import app


PLAN_TEXT = """Week 1 notes: keep 2 reps in reserve.

Day 1 - Upper:
- Bench Press - 4x10 @ 50kg | 60s | 90s
- Pull-up - 3x8 @ BW | 90s | 2min

Day 2 - Lower:
- Squat - 5x5 @ 80kg | 2min | 3min
"""


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def set_fk(conn, record):  # pragma: no cover
        cursor = conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    User.__table__.create(bind=engine)
    WorkoutPlan.__table__.create(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client, TestingSessionLocal
    app.dependency_overrides.clear()


def _seed_plan(session_factory, plan_details=PLAN_TEXT):
    session = session_factory()
    try:
        user_id = uuid4()
        session.add(User(id=user_id))
        session.flush()
        plan = WorkoutPlan(user_id=user_id, name="Upper/Lower", plan_details=plan_details, is_active=True)
        session.add(plan)
        session.commit()
        return plan.id
    finally:
        session.close()


def test_update_exercise_weight_rewrites_only_target(client):
    test_client, session_factory = client
    plan_id = _seed_plan(session_factory)

    resp = test_client.post(
        f"/plans/{plan_id}/exercise-weight",
        json={"exercise_name": "Bench Press", "new_weight": "55kg"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["changed"] is True
    assert body["plan_details"] == PLAN_TEXT.replace("@ 50kg", "@ 55kg")

    again = test_client.post(
        f"/plans/{plan_id}/exercise-weight",
        json={"exercise_name": "Bench Press", "new_weight": "55kg"},
    )
    assert again.json()["changed"] is False

    session = session_factory()
    stored = session.get(WorkoutPlan, plan_id)
    assert "Bench Press - 4x10 @ 55kg | 60s | 90s" in stored.plan_details
    assert "Squat - 5x5 @ 80kg | 2min | 3min" in stored.plan_details
    session.close()


def test_update_unknown_exercise_is_noop(client):
    test_client, session_factory = client
    plan_id = _seed_plan(session_factory)

    resp = test_client.post(
        f"/plans/{plan_id}/exercise-weight",
        json={"exercise_name": "Nonexistent Exercise", "new_weight": "10kg"},
    )

    assert resp.status_code == 200
    assert resp.json()["changed"] is False
    assert resp.json()["plan_details"] == PLAN_TEXT


def test_unknown_plan_returns_404(client):
    test_client, _ = client

    resp = test_client.post(
        f"/plans/{uuid4()}/exercise-weight",
        json={"exercise_name": "Bench Press", "new_weight": "55kg"},
    )

    assert resp.status_code == 404


def test_next_workout_preview(client):
    test_client, session_factory = client
    plan_id = _seed_plan(session_factory)

    resp = test_client.get(f"/plans/{plan_id}/next-workout")

    assert resp.status_code == 200
    assert resp.json()["day"] == "Day 1 - Upper"
    assert resp.json()["exercises"] == [
        "Bench Press - 4x10 @ 50kg | 60s | 90s",
        "Pull-up - 3x8 @ BW | 90s | 2min",
    ]


def test_next_workout_missing_sections_returns_404(client):
    test_client, session_factory = client
    plan_id = _seed_plan(session_factory, plan_details="Just rest this week.")

    resp = test_client.get(f"/plans/{plan_id}/next-workout")

    assert resp.status_code == 404


def test_weight_with_column_separator_rejected(client):
    test_client, session_factory = client
    plan_id = _seed_plan(session_factory)

    resp = test_client.post(
        f"/plans/{plan_id}/exercise-weight",
        json={"exercise_name": "Bench Press", "new_weight": "50|55kg"},
    )

    assert resp.status_code == 422
    session = session_factory()
    assert session.get(WorkoutPlan, plan_id).plan_details == PLAN_TEXT
    session.close()
