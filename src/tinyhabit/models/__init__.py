"""Model exports."""

from .habit import (
    DEFAULT_HABIT_NAME,
    CompletionEntry,
    HabitDocument,
    HabitState,
    HistoryEntry,
)
from .snapshot import HabitSnapshot

__all__ = [
    "DEFAULT_HABIT_NAME",
    "CompletionEntry",
    "HabitDocument",
    "HabitSnapshot",
    "HabitState",
    "HistoryEntry",
]
