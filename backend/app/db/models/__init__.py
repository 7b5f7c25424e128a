"""ORM models exposed for metadata discovery."""
from app.db.models.daily_task import DailyTask
from app.db.models.reminder_config import ReminderConfig
from app.db.models.user import User
from app.db.models.workout_plan import WorkoutPlan

__all__ = [
    "DailyTask",
    "ReminderConfig",
    "User",
    "WorkoutPlan",
]
