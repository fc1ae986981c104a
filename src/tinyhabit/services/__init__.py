"""Service layer exports."""

from .habits import HabitService, summarize
from .streaks import build_history, current_streak, today_from, utc_now

__all__ = [
    "HabitService",
    "build_history",
    "current_streak",
    "summarize",
    "today_from",
    "utc_now",
]
