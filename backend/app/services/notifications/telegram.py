"""Telegram Bot API provider."""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from app.core.config import settings
from app.services.notifications.base import NotificationResult, NotificationService, NotificationTarget


logger = logging.getLogger(__name__)


class TelegramNotificationService(NotificationService):
    """Send HTML messages through ``sendMessage`` using each user's own bot."""

    def __init__(
        self,
        *,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_base = (api_base or settings.telegram_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.telegram_timeout_seconds
        self._transport = transport

    def send_message(
        self,
        *,
        target: NotificationTarget,
        text: str,
        request_id: str | None,
    ) -> NotificationResult:
        if not target.bot_token or not target.chat_id:
            logger.warning("Telegram not configured for user %s", target.user_id)
            return NotificationResult(status="skipped", reason="telegram not configured")

        url = f"{self.api_base}/bot{target.bot_token}/sendMessage"
        payload = {"chat_id": target.chat_id, "text": text, "parse_mode": "HTML"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Telegram send failed for user %s: %s", target.user_id, exc.__class__.__name__)
            return NotificationResult(status="failed", reason=f"telegram error: {exc.__class__.__name__}")

        logger.info("Telegram message sent to chat %s (user=%s)", target.chat_id, target.user_id)
        return NotificationResult(status="sent", reason="delivered")
