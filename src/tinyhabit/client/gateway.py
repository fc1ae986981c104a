"""Remote/local reconciliation for the habit client.

Remote state wins on load when the backend answered; every mutation is
written locally first and then synced to the backend on a best-effort basis.
This is last-write-wins replication with no conflict detection, intended for
one user on one device.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from pydantic import ValidationError

from ..logging_config import get_logger
from ..models.habit import DEFAULT_HABIT_NAME, HabitState, HistoryEntry
from ..services.streaks import Clock, build_history, current_streak, today_from, utc_now
from .api import ApiClient, ApiError
from .local_store import LocalStore

logger = get_logger(__name__)


class SyncStatus(str, Enum):
    LOCAL = "local"
    SYNCING = "syncing"
    SYNCED = "synced"
    ERROR = "error"


@dataclass
class HabitView:
    """Everything the client displays for the habit."""

    name: str
    streak: int
    completed_today: bool
    history: list[HistoryEntry] = field(default_factory=list)
    records: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_state(cls, state: HabitState, *, clock: Clock = utc_now) -> "HabitView":
        today = today_from(clock)
        return cls(
            name=state.name,
            streak=current_streak(state.records, today=today),
            completed_today=state.is_completed(today),
            history=build_history(state.records, today=today),
            records=state.to_payload()["records"],
        )


class PersistenceGateway:
    """Keep the local copy authoritative for writes while mirroring to the backend."""

    def __init__(
        self,
        local: LocalStore,
        api: ApiClient | None = None,
        *,
        default_name: str = DEFAULT_HABIT_NAME,
        clock: Clock = utc_now,
    ):
        self.local = local
        self.api = api
        self.default_name = default_name
        self.clock = clock
        self.backend_available: bool | None = None
        self.status = SyncStatus.LOCAL
        self.state: HabitState | None = None

    def start(self) -> bool:
        """Probe the backend once; the answer holds for the rest of the session."""

        if self.backend_available is None:
            self.backend_available = self.api is not None and self.api.is_backend_available()
            if self.backend_available:
                logger.info("Backend is available - enabling sync features")
            else:
                logger.info("Backend not available - using local storage only")
        return self.backend_available

    def _sync(self, action: Callable[[ApiClient], Any]) -> Any | None:
        if not self.start():
            return None

        self.status = SyncStatus.SYNCING
        try:
            result = action(self.api)
        except ApiError as exc:
            logger.warning("Backend sync failed", extra={"error": str(exc)})
            self.status = SyncStatus.ERROR
            return None
        self.status = SyncStatus.SYNCED
        return result

    def load(self) -> HabitView:
        remote_state: HabitState | None = None
        remote_payload = self._sync(lambda api: api.get_habit())
        if remote_payload is not None:
            try:
                remote_state = HabitState.model_validate(remote_payload)
            except ValidationError as exc:
                logger.warning("Ignoring malformed backend habit data", extra={"error": str(exc)})
                self.status = SyncStatus.ERROR

        local_state = self.local.load()

        if remote_state is not None:
            state = remote_state
            self.local.save(state)
        elif local_state is not None:
            state = local_state
        else:
            state = HabitState.empty(self.default_name)
            self.local.save(state)

        self.state = state
        return HabitView.from_state(state, clock=self.clock)

    def _current(self) -> HabitState:
        if self.state is None:
            self.load()
        return self.state

    def complete(self) -> HabitView:
        now = self.clock()
        today = today_from(lambda: now)
        updated = self._current().with_completion(today, now.isoformat())

        self.local.save(updated)
        self.state = updated
        self._sync(lambda api: api.complete_habit())
        return HabitView.from_state(updated, clock=self.clock)

    def reset(self) -> HabitView:
        updated = self._current().cleared()

        self.local.save(updated)
        self.state = updated
        self._sync(lambda api: api.reset_habit())
        return HabitView.from_state(updated, clock=self.clock)


__all__ = ["HabitView", "PersistenceGateway", "SyncStatus"]
