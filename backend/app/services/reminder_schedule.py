"""Reminder window policy: which hours a user gets nudged, and how hard."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Literal, Optional

REMINDER_END_HOUR = 20
DEFAULT_START_HOUR = 9
# Shorter than an hour so a late tick still fires, long enough to absorb overlapping ticks.
REMINDER_SUPPRESSION = timedelta(minutes=55)

UrgencyTier = Literal["gentle", "moderate", "urgent", "critical"]

SKIP_OUTSIDE_WINDOW = "outside_window"
SKIP_NOT_SCHEDULED = "not_scheduled_hour"
SKIP_RECENTLY_SENT = "recently_sent"


def compute_reminder_schedule(start_hour: int) -> List[int]:
    """
    Hours at which reminders go out for a day starting at ``start_hour``.

    Two 2-hour gaps first, then hourly until ``REMINDER_END_HOUR``:
    ``compute_reminder_schedule(9) == [9, 11, 13, 14, 15, 16, 17, 18, 19, 20]``.
    """
    schedule = [start_hour]
    for offset in (2, 4):
        if start_hour + offset <= REMINDER_END_HOUR:
            schedule.append(start_hour + offset)
    hour = schedule[-1]
    while hour < REMINDER_END_HOUR:
        hour += 1
        schedule.append(hour)
    return schedule


def urgency_tier(hour: int) -> UrgencyTier:
    if hour < 12:
        return "gentle"
    if hour < 15:
        return "moderate"
    if hour < 18:
        return "urgent"
    return "critical"


def evaluate_reminder(
    now: datetime,
    start_hour: Optional[int],
    last_sent_at: Optional[datetime],
) -> Optional[str]:
    """Return why no reminder is due at ``now``, or None when one should be sent."""
    if start_hour is None:
        start_hour = DEFAULT_START_HOUR
    current_hour = now.hour

    if current_hour < start_hour or current_hour > REMINDER_END_HOUR:
        return SKIP_OUTSIDE_WINDOW
    if current_hour not in compute_reminder_schedule(start_hour):
        return SKIP_NOT_SCHEDULED
    if last_sent_at is not None and now - last_sent_at < REMINDER_SUPPRESSION:
        return SKIP_RECENTLY_SENT
    return None
