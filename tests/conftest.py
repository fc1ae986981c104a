"""Pytest configuration and shared fixtures for Tiny Habit Logger tests.

Every fixture works against a temporary data directory so tests never touch
the real ``instance`` folder, and "today" is pinned through an injectable clock.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from tinyhabit import create_app
from tinyhabit.client.api import ApiError
from tinyhabit.client.local_store import KeyValueFileStore, LocalStore, SnapshotStore
from tinyhabit.infra.file_store import HabitFileStore
from tinyhabit.models import CompletionEntry, HabitState
from tinyhabit.services.habits import HabitService

FIXED_NOW = datetime(2024, 1, 3, 10, 30, tzinfo=timezone.utc)
FIXED_TODAY = FIXED_NOW.date()


def records_for(days: list[date]) -> dict[str, CompletionEntry]:
    """Build a RecordStore with an entry for each day."""

    return {
        day.isoformat(): CompletionEntry(completed=True, timestamp=f"{day.isoformat()}T08:00:00+00:00")
        for day in days
    }


def consecutive_days(count: int, *, end: date = FIXED_TODAY) -> list[date]:
    return [end - timedelta(days=offset) for offset in range(count)]


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point every configurable path at the test's temporary directory."""

    for name in (
        "TINYHABIT_DATA_FILE",
        "TINYHABIT_LOCAL_DB",
        "TINYHABIT_LOCAL_FILE",
        "TINYHABIT_HABIT_NAME",
        "TINYHABIT_API_URL",
        "TINYHABIT_API_TIMEOUT",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TINYHABIT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TINYHABIT_DEV_MODE", "true")
    yield tmp_path

    # handlers hold streams and files owned by this test
    logger = logging.getLogger("tinyhabit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


# =============================================================================
# Backend fixtures
# =============================================================================


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


@pytest.fixture
def store(data_file: Path) -> HabitFileStore:
    file_store = HabitFileStore(data_file)
    file_store.ensure_initialized()
    return file_store


@pytest.fixture
def service(store: HabitFileStore, clock) -> HabitService:
    return HabitService(store, clock=clock)


@pytest.fixture
def app(clock):
    application = create_app("testing")
    application.extensions["tinyhabit"].clock = clock
    return application


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


# =============================================================================
# Client fixtures
# =============================================================================


@pytest.fixture
def local_store(tmp_path: Path):
    snapshots = SnapshotStore(f"sqlite:///{tmp_path / 'client.db'}")
    store = LocalStore(snapshots, KeyValueFileStore(tmp_path / "local_storage.json"))
    yield store
    snapshots.dispose()


class FakeApi:
    """In-memory stand-in for :class:`tinyhabit.client.api.ApiClient`."""

    def __init__(self, state: HabitState | None = None, *, available: bool = True):
        self.state = state or HabitState()
        self.available = available
        self.fail_requests = False
        self.calls: list[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_requests:
            raise ApiError("backend went away")

    def is_backend_available(self) -> bool:
        self.calls.append("health")
        return self.available

    def get_habit(self) -> dict[str, Any]:
        self._record("get_habit")
        return {
            "name": self.state.name,
            "streak": 0,
            "completedToday": False,
            "records": self.state.to_payload()["records"],
        }

    def complete_habit(self) -> dict[str, Any]:
        self._record("complete_habit")
        self.state = self.state.with_completion(FIXED_TODAY, FIXED_NOW.isoformat())
        return {"success": True, "streak": 1, "completedToday": True, "message": "ok"}

    def reset_habit(self) -> dict[str, Any]:
        self._record("reset_habit")
        self.state = self.state.cleared()
        return {"success": True, "streak": 0, "completedToday": False, "message": "ok"}


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()
