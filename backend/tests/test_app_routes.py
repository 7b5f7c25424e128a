"""Regression tests for application route registration."""
from fastapi.routing import APIRoute

from app.main import app


def _routes(path: str, method: str) -> list:
    return [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path == path and method in route.methods
    ]


def test_daily_tasks_route_registered_once() -> None:
    """Ensure the lazy-reset listing endpoint is not mounted multiple times."""
    assert len(_routes("/daily-tasks", "GET")) == 1


def test_core_routes_present() -> None:
    assert _routes("/plans/{plan_id}/exercise-weight", "POST")
    assert _routes("/plans/{plan_id}/next-workout", "GET")
    assert _routes("/reminders/config", "PUT")
    assert _routes("/jobs/run-now", "POST")
