"""Per-request and per-job context utilities."""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from uuid import uuid4

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the current request id if available."""
    return request_id_ctx_var.get()


@contextmanager
def job_context(job_name: str) -> Iterator[str]:
    """Tag log records emitted during a scheduler run with a job-scoped id."""
    run_id = f"job:{job_name}:{uuid4().hex[:8]}"
    token = request_id_ctx_var.set(run_id)
    try:
        yield run_id
    finally:
        request_id_ctx_var.reset(token)
