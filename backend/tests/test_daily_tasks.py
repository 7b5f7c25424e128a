from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models.daily_task import DailyTask
from app.db.models.user import User
from app.services.daily_tasks import (
    check_and_reset_tasks,
    create_task,
    is_reset_due,
    list_incomplete_tasks,
    list_tasks,
    reset_tasks,
    toggle_task,
)

NOW = datetime(2026, 3, 10, 0, 5, tzinfo=timezone.utc)


def _session():
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

    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    User.__table__.create(bind=engine)
    DailyTask.__table__.create(bind=engine)
    return TestingSession


def _seed_tasks(session_factory, user_id, *tasks: dict) -> None:
    session = session_factory()
    try:
        if session.get(User, user_id) is None:
            session.add(User(id=user_id))
            session.flush()
        for fields in tasks:
            session.add(DailyTask(user_id=user_id, **fields))
        session.commit()
    finally:
        session.close()


def test_reset_due_when_no_task_reset_today() -> None:
    yesterday = NOW - timedelta(days=1)
    tasks = [
        DailyTask(title="Stretch", last_reset_at=None),
        DailyTask(title="Walk", last_reset_at=yesterday),
    ]

    assert is_reset_due(tasks, NOW.date(), timezone.utc) is True


def test_reset_not_due_when_any_task_reset_today() -> None:
    tasks = [
        DailyTask(title="Stretch", last_reset_at=NOW - timedelta(days=1)),
        DailyTask(title="Walk", last_reset_at=NOW.replace(hour=0, minute=0)),
    ]

    assert is_reset_due(tasks, NOW.date(), timezone.utc) is False


def test_reset_uses_calendar_day_not_rolling_window() -> None:
    # 23:59 yesterday is only minutes ago but still a different day.
    tasks = [DailyTask(title="Walk", last_reset_at=datetime(2026, 3, 9, 23, 59, tzinfo=timezone.utc))]

    assert is_reset_due(tasks, date(2026, 3, 10), timezone.utc) is True


def test_reset_tasks_clears_completion() -> None:
    tasks = [
        DailyTask(title="Stretch", completed=True, completed_at=NOW),
        DailyTask(title="Walk", completed=False),
    ]

    assert reset_tasks(tasks, NOW) == 2
    assert all(task.completed is False for task in tasks)
    assert all(task.completed_at is None for task in tasks)
    assert all(task.last_reset_at == NOW for task in tasks)


def test_check_and_reset_runs_once_per_day() -> None:
    Session = _session()
    user_id = uuid4()
    yesterday = NOW - timedelta(days=1)
    _seed_tasks(
        Session,
        user_id,
        {"title": "Stretch", "completed": True, "last_reset_at": yesterday},
        {"title": "Walk", "completed": True, "last_reset_at": None},
    )

    session = Session()
    assert check_and_reset_tasks(session, user_id, now=NOW) is True
    assert len(list_incomplete_tasks(session, user_id)) == 2

    task = list_tasks(session, user_id)[0]
    toggle_task(session, task, now=NOW + timedelta(hours=3))
    assert check_and_reset_tasks(session, user_id, now=NOW + timedelta(hours=4)) is False
    assert len(list_incomplete_tasks(session, user_id)) == 1

    assert check_and_reset_tasks(session, user_id, now=NOW + timedelta(days=1)) is True
    assert len(list_incomplete_tasks(session, user_id)) == 2
    session.close()


def test_check_and_reset_without_tasks_is_noop() -> None:
    Session = _session()
    session = Session()

    assert check_and_reset_tasks(session, uuid4(), now=NOW) is False
    session.close()


def test_created_task_survives_same_day_lazy_reset() -> None:
    Session = _session()
    session = Session()
    user_id = uuid4()

    task = create_task(session, user_id, "  Drink water  ", now=NOW)
    assert task.title == "Drink water"
    toggle_task(session, task, now=NOW + timedelta(minutes=1))

    assert check_and_reset_tasks(session, user_id, now=NOW + timedelta(hours=1)) is False
    assert list_incomplete_tasks(session, user_id) == []
    session.close()


def test_create_task_applies_pending_reset_first() -> None:
    Session = _session()
    user_id = uuid4()
    _seed_tasks(
        Session,
        user_id,
        {"title": "Stretch", "completed": True, "completed_at": NOW - timedelta(days=1), "last_reset_at": NOW - timedelta(days=1)},
    )
    session = Session()

    create_task(session, user_id, "Drink water", now=NOW)

    assert check_and_reset_tasks(session, user_id, now=NOW + timedelta(minutes=1)) is False
    titles = sorted(task.title for task in list_incomplete_tasks(session, user_id))
    assert titles == ["Drink water", "Stretch"]
    session.close()
