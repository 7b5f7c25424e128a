"""Time helpers shared by the schedulers and the task store."""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings


def scheduler_zone() -> ZoneInfo:
    return ZoneInfo(settings.scheduler_timezone)


def local_now() -> datetime:
    """Current time in the scheduler timezone."""
    return datetime.now(scheduler_zone())


def to_zone(value: Optional[datetime], tz: Optional[tzinfo]) -> Optional[datetime]:
    """
    Express a stored timestamp in ``tz``.

    SQLite hands timestamps back without an offset; those are wall-clock values
    in the scheduler zone and get ``tz`` attached rather than converted.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=tz) if tz is not None else value
    if tz is None:
        return value.replace(tzinfo=None)
    return value.astimezone(tz)
