"""Notification service interface."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

DELIVERED_STATUSES = frozenset({"sent", "noop"})


@dataclass
class NotificationTarget:
    user_id: UUID
    chat_id: Optional[str]
    bot_token: Optional[str]


@dataclass
class NotificationResult:
    status: str
    reason: str

    @property
    def delivered(self) -> bool:
        return self.status in DELIVERED_STATUSES


class NotificationService:
    """Base interface for notification providers."""

    def send_message(
        self,
        *,
        target: NotificationTarget,
        text: str,
        request_id: str | None,
    ) -> NotificationResult:
        raise NotImplementedError
