"""Habit state data structures."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_HABIT_NAME = "Drink Water"


class CompletionEntry(BaseModel):
    """Completion marker stored for a calendar day."""

    model_config = ConfigDict(extra="ignore")

    completed: bool = True
    timestamp: str = ""

    @field_validator("timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class HabitState(BaseModel):
    """The tracked habit and its completion records keyed by ``YYYY-MM-DD``."""

    model_config = ConfigDict(extra="ignore")

    name: str = DEFAULT_HABIT_NAME
    records: dict[str, CompletionEntry] = Field(default_factory=dict)

    @field_validator("name", mode="before")
    @classmethod
    def default_blank_name(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_HABIT_NAME
        return value if isinstance(value, str) else str(value)

    @field_validator("records", mode="before")
    @classmethod
    def drop_incomplete_days(cls, value: Any) -> Any:
        """Keep only days that were actually completed.

        Legacy payloads may hold bare ``true`` markers or explicit ``false``
        entries; absence is the only representation of "not completed". An
        entry that cannot be read is dropped on its own so the remaining days
        survive.
        """

        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("records must be a mapping of dates to entries")

        cleaned: dict[str, Any] = {}
        for key, entry in value.items():
            try:
                day_key = date.fromisoformat(str(key)).isoformat()
            except ValueError:
                continue
            if entry is True:
                cleaned[day_key] = {"completed": True}
            elif isinstance(entry, CompletionEntry):
                if entry.completed:
                    cleaned[day_key] = entry
            elif isinstance(entry, dict):
                try:
                    parsed = CompletionEntry.model_validate(entry)
                except ValidationError:
                    continue
                if parsed.completed:
                    cleaned[day_key] = parsed
        return cleaned

    @classmethod
    def empty(cls, name: str | None = None) -> "HabitState":
        return cls(name=name or DEFAULT_HABIT_NAME)

    def is_completed(self, day: date) -> bool:
        return day.isoformat() in self.records

    def completed_days(self) -> set[date]:
        return {date.fromisoformat(key) for key in self.records}

    def with_completion(self, day: date, timestamp: str) -> "HabitState":
        """Return a copy with ``day`` marked complete, overwriting any prior entry."""

        records = dict(self.records)
        records[day.isoformat()] = CompletionEntry(completed=True, timestamp=timestamp)
        return HabitState(name=self.name, records=records)

    def cleared(self) -> "HabitState":
        return HabitState(name=self.name, records={})

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class HabitDocument(BaseModel):
    """Top-level JSON document persisted by the backend."""

    habit: HabitState = Field(default_factory=HabitState)


class HistoryEntry(BaseModel):
    """One day of the trailing week shown next to the streak."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    completed: bool
    day_name: str = Field(alias="dayName")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
