"""Notification configuration routes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from app.core.config import settings


router = APIRouter()


@router.get("/notifications/config", tags=["notifications"])
def get_notifications_config(request: Request) -> dict:
    request_id = getattr(request.state, "request_id", None)
    return {
        "enabled": settings.notifications_enabled,
        "provider": settings.notifications_provider,
        "request_id": request_id or "",
    }
