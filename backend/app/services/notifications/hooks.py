"""Delivery hook wrapping providers with settings checks, tracing and metrics."""
from __future__ import annotations

import logging
from time import perf_counter

from app.core.config import settings
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.notifications.base import NotificationResult, NotificationService, NotificationTarget


logger = logging.getLogger(__name__)


def deliver(
    service: NotificationService,
    *,
    job_name: str,
    target: NotificationTarget,
    text: str,
    request_id: str | None = None,
) -> NotificationResult:
    """Send ``text`` to ``target`` unless notifications are switched off."""
    if not settings.notifications_enabled:
        log_metric("notifications.skipped", 1, metadata={"job": job_name, "reason": "disabled"})
        return NotificationResult(status="skipped", reason="notifications disabled")

    metadata = {
        "job": job_name,
        "provider": settings.notifications_provider,
        "message_chars": len(text),
    }
    start = perf_counter()
    with trace(
        f"notifications.{job_name}",
        metadata=metadata,
        user_id=str(target.user_id),
        request_id=request_id,
    ) as notification_trace:
        result = service.send_message(target=target, text=text, request_id=request_id)
        if notification_trace:
            notification_trace.update(output={"status": result.status, "reason": result.reason})

    duration_ms = (perf_counter() - start) * 1000
    if result.delivered:
        outcome = "sent"
    elif result.status == "skipped":
        outcome = "skipped"
    else:
        outcome = "failed"
        logger.warning("Notification %s for user %s failed: %s", job_name, target.user_id, result.reason)
    log_metric(f"notifications.{outcome}", 1, metadata={"job": job_name, "provider": settings.notifications_provider})
    log_metric("notifications.duration_ms", duration_ms, metadata={"job": job_name})
    return result
