"""Device-local habit snapshots stored in SQLite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HabitSnapshot(SQLModel, table=True):
    """Single-row object store holding the serialized habit state on the device."""

    __tablename__: ClassVar[str] = "habit_snapshot"

    id: str = Field(primary_key=True, max_length=64)
    payload: str = Field(nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
