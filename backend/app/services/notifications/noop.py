"""No-op notification provider (logs only)."""
from __future__ import annotations

import logging

from app.services.notifications.base import NotificationResult, NotificationService, NotificationTarget


logger = logging.getLogger(__name__)


class NoopNotificationService(NotificationService):
    def send_message(
        self,
        *,
        target: NotificationTarget,
        text: str,
        request_id: str | None,
    ) -> NotificationResult:
        logger.info(
            "Notification queued (noop) user=%s chars=%s request=%s",
            target.user_id,
            len(text),
            request_id or "-",
        )
        return NotificationResult(status="noop", reason="notification provider is noop")
