"""Habit service orchestrating the record store, streaks and history."""

from __future__ import annotations

from typing import Any

from ..infra.file_store import HabitFileStore
from ..logging_config import get_logger
from ..models.habit import HabitState
from .streaks import Clock, build_history, current_streak, today_from, utc_now

logger = get_logger(__name__)

COMPLETED_MESSAGE = "Habit marked as completed for today"
RESET_MESSAGE = "Habit data reset successfully"


def summarize(state: HabitState, *, clock: Clock = utc_now) -> dict[str, Any]:
    """Return the ``{name, streak, completedToday, records}`` view of a state."""

    today = today_from(clock)
    return {
        "name": state.name,
        "streak": current_streak(state.records, today=today),
        "completedToday": state.is_completed(today),
        "records": state.to_payload()["records"],
    }


class HabitService:
    """Get, complete and reset the tracked habit.

    Every mutation goes through :meth:`HabitFileStore.update`, which holds the
    store lock for the whole read-modify-write and only returns after the new
    document has been written. Write failures propagate as ``StorageError``.
    """

    def __init__(self, store: HabitFileStore, *, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

    def get_habit(self) -> dict[str, Any]:
        return summarize(self.store.load(), clock=self.clock)

    def complete_habit(self) -> dict[str, Any]:
        now = self.clock()
        today = today_from(lambda: now)

        state = self.store.update(
            lambda current: current.with_completion(today, now.isoformat())
        )
        streak = current_streak(state.records, today=today)
        logger.info("Habit completed", extra={"day": today.isoformat(), "streak": streak})
        return {
            "success": True,
            "streak": streak,
            "completedToday": True,
            "message": COMPLETED_MESSAGE,
        }

    def reset_habit(self) -> dict[str, Any]:
        self.store.update(lambda current: current.cleared())
        logger.info("Habit records reset")
        return {
            "success": True,
            "streak": 0,
            "completedToday": False,
            "message": RESET_MESSAGE,
        }

    def get_history(self) -> list[dict[str, Any]]:
        state = self.store.load()
        return [
            entry.to_payload()
            for entry in build_history(state.records, today=today_from(self.clock))
        ]


__all__ = ["COMPLETED_MESSAGE", "RESET_MESSAGE", "HabitService", "summarize"]
