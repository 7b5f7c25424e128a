"""Rendering of reminder and preview messages (Telegram HTML)."""
from __future__ import annotations

from html import escape
from typing import Sequence

from app.services.plan_text import DaySection
from app.services.reminder_schedule import urgency_tier

TIER_EMOJI = {
    "gentle": "💪",
    "moderate": "⚡",
    "urgent": "🔥",
    "critical": "🚨",
}

TIER_TEXT = {
    "gentle": "Good morning! Time to get things done.",
    "moderate": "Hey! Don't forget about your tasks today.",
    "urgent": "Time is running out! Complete your tasks now!",
    "critical": "⚠️ URGENT: Complete your tasks before the day ends!",
}


def render_task_reminder(titles: Sequence[str], hour: int) -> str:
    tier = urgency_tier(hour)
    count = len(titles)
    task_lines = "\n".join(f"• {escape(title)}" for title in titles)
    return (
        f"{TIER_EMOJI[tier]} <b>Daily Tasks Reminder</b>\n\n"
        f"{TIER_TEXT[tier]}\n\n"
        f"You have {count} task{'s' if count != 1 else ''} to complete:\n"
        f"{task_lines}"
    )


def render_workout_preview(plan_name: str, workout: DaySection) -> str:
    exercise_lines = "\n".join(f"  {escape(exercise)}" for exercise in workout.exercises)
    return (
        f"💪 <b>{escape(plan_name)}</b>\n\n"
        f"<b>{escape(workout.label)}</b>\n\n"
        f"{exercise_lines}\n\n"
        "🔥 Let's crush it!"
    )
