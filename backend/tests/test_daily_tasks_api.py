from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.deps import get_db
from app.db.models.daily_task import DailyTask
from app.db.models.user import User
from app.main import app


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):  # pragma: no cover - sqlite setup
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    User.__table__.create(bind=engine)
    DailyTask.__table__.create(bind=engine)

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


def _seed_completed_tasks(session_factory, titles, *, last_reset_at):
    session = session_factory()
    try:
        user_id = uuid4()
        session.add(User(id=user_id))
        session.flush()
        for title in titles:
            session.add(DailyTask(user_id=user_id, title=title, completed=True, last_reset_at=last_reset_at))
        session.commit()
        return user_id
    finally:
        session.close()


def test_listing_applies_reset_once_per_day(client):
    test_client, session_factory = client
    yesterday = datetime.now(timezone.utc) - timedelta(days=1)
    user_id = _seed_completed_tasks(session_factory, ["Stretch", "Walk"], last_reset_at=yesterday)

    first = test_client.get("/daily-tasks", params={"user_id": str(user_id)})
    assert first.status_code == 200
    body = first.json()
    assert len(body) == 2
    assert all(task["completed"] is False for task in body)

    toggle = test_client.patch(f"/daily-tasks/{body[0]['id']}/toggle", json={"user_id": str(user_id)})
    assert toggle.status_code == 200
    assert toggle.json()["completed"] is True

    second = test_client.get("/daily-tasks", params={"user_id": str(user_id)})
    completed = [task for task in second.json() if task["completed"]]
    assert len(completed) == 1

    incomplete = test_client.get("/daily-tasks/incomplete", params={"user_id": str(user_id)})
    assert {task["title"] for task in incomplete.json()} == {t["title"] for t in second.json() if not t["completed"]}


def test_create_toggle_delete_flow(client):
    test_client, _ = client
    user_id = uuid4()

    created = test_client.post("/daily-tasks", json={"user_id": str(user_id), "title": "Drink water"})
    assert created.status_code == 201
    task_id = created.json()["id"]

    toggled = test_client.patch(f"/daily-tasks/{task_id}/toggle", json={"user_id": str(user_id)})
    assert toggled.json()["completed"] is True

    listed = test_client.get("/daily-tasks", params={"user_id": str(user_id)})
    assert listed.json()[0]["completed"] is True

    other = test_client.delete(f"/daily-tasks/{task_id}", params={"user_id": str(uuid4())})
    assert other.status_code == 403

    deleted = test_client.delete(f"/daily-tasks/{task_id}", params={"user_id": str(user_id)})
    assert deleted.status_code == 204
    assert test_client.get("/daily-tasks", params={"user_id": str(user_id)}).json() == []


def test_blank_title_rejected(client):
    test_client, _ = client

    resp = test_client.post("/daily-tasks", json={"user_id": str(uuid4()), "title": "   "})

    assert resp.status_code == 400


def test_toggle_unknown_task_returns_404(client):
    test_client, _ = client

    resp = test_client.patch(f"/daily-tasks/{uuid4()}/toggle", json={"user_id": str(uuid4())})

    assert resp.status_code == 404


def test_manual_reset_forces_reset(client):
    test_client, session_factory = client
    today = datetime.now(timezone.utc)
    user_id = _seed_completed_tasks(session_factory, ["Stretch"], last_reset_at=today)

    resp = test_client.post("/daily-tasks/reset", json={"user_id": str(user_id)})

    assert resp.status_code == 200
    assert resp.json()["tasks_reset"] == 1
    incomplete = test_client.get("/daily-tasks/incomplete", params={"user_id": str(user_id)})
    assert len(incomplete.json()) == 1
