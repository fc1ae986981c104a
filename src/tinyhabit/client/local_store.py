"""Device-local copy of the habit state.

The primary store is a single-row SQLite object store; a JSON key-value file
takes over whenever SQLite cannot be opened or written.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..infra.file_store import StorageError
from ..logging_config import get_logger
from ..models.habit import HabitState
from ..models.snapshot import HabitSnapshot

logger = get_logger(__name__)

SNAPSHOT_ID = "habitData"
STORAGE_KEY = "habitTracker"


def _parse_state(payload: str | None, *, source: str) -> HabitState | None:
    if payload is None:
        return None
    try:
        return HabitState.model_validate_json(payload)
    except ValidationError as exc:
        logger.warning("Discarding malformed local habit data", extra={"source": source, "error": str(exc)})
        return None


class SnapshotStore:
    """SQLModel-backed object store keyed by a fixed snapshot id."""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine = None

    def _get_engine(self):
        if self._engine is None:
            engine = create_engine(self.database_url, connect_args={"check_same_thread": False})
            SQLModel.metadata.create_all(engine, tables=[HabitSnapshot.__table__])
            self._engine = engine
        return self._engine

    def get(self, snapshot_id: str = SNAPSHOT_ID) -> str | None:
        with Session(self._get_engine()) as session:
            row = session.get(HabitSnapshot, snapshot_id)
            return row.payload if row else None

    def put(self, payload: str, snapshot_id: str = SNAPSHOT_ID) -> None:
        with Session(self._get_engine()) as session:
            row = session.get(HabitSnapshot, snapshot_id)
            if row is None:
                row = HabitSnapshot(id=snapshot_id, payload=payload)
            else:
                row.payload = payload
                row.updated_at = datetime.now(timezone.utc)
            session.add(row)
            session.commit()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


class KeyValueFileStore:
    """Flat JSON file mapping string keys to serialized values."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_bytes())
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Local key-value file is not valid JSON", extra={"path": str(self.path)})
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class LocalStore:
    """Load and save the habit state on this device."""

    def __init__(self, snapshots: SnapshotStore, fallback: KeyValueFileStore):
        self.snapshots = snapshots
        self.fallback = fallback

    @classmethod
    def from_config(cls, config: BaseConfig) -> "LocalStore":
        return cls(SnapshotStore(config.local_database_url), KeyValueFileStore(config.LOCAL_FILE))

    def load(self) -> HabitState | None:
        try:
            state = _parse_state(self.snapshots.get(), source="sqlite")
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Local database unavailable, reading fallback file", extra={"error": str(exc)})
            state = None
        if state is not None:
            return state

        try:
            return _parse_state(self.fallback.get_item(STORAGE_KEY), source="file")
        except OSError:
            logger.exception("Error loading data locally")
            return None

    def save(self, state: HabitState) -> None:
        payload = state.model_dump_json()
        try:
            self.snapshots.put(payload)
            return
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Local database write failed, using fallback file", extra={"error": str(exc)})

        try:
            self.fallback.set_item(STORAGE_KEY, payload)
        except OSError as exc:
            logger.exception("Error saving data locally")
            raise StorageError("Failed to save habit data on this device") from exc


__all__ = ["KeyValueFileStore", "LocalStore", "SnapshotStore", "SNAPSHOT_ID", "STORAGE_KEY"]
