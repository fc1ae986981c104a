"""Streak and weekly history helpers derived from habit records."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Mapping

from ..models.habit import HistoryEntry

HISTORY_DAYS = 7
_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today_from(clock: Clock) -> date:
    """Return the calendar day used as the record key for ``clock()``.

    Aware datetimes are normalised to UTC so the key matches the ISO timestamp
    written alongside the entry.
    """

    moment = clock()
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def current_streak(records: Mapping[str, object] | None, *, today: date) -> int:
    """Count consecutive completed days walking backwards from ``today``."""

    if not records:
        return 0

    streak = 0
    cursor = today
    while cursor.isoformat() in records:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def build_history(
    records: Mapping[str, object] | None, *, today: date, days: int = HISTORY_DAYS
) -> list[HistoryEntry]:
    """Return the trailing ``days`` calendar days ending today, oldest first."""

    records = records or {}
    start = today - timedelta(days=days - 1)
    history: list[HistoryEntry] = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        key = day.isoformat()
        history.append(
            HistoryEntry(date=key, completed=key in records, dayName=_DAY_NAMES[day.weekday()])
        )
    return history


__all__ = [
    "HISTORY_DAYS",
    "Clock",
    "build_history",
    "current_streak",
    "today_from",
    "utc_now",
]
