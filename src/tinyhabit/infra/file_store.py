"""JSON document storage for the backend habit state."""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from ..logging_config import get_logger
from ..models.habit import DEFAULT_HABIT_NAME, HabitDocument, HabitState

logger = get_logger(__name__)


class StorageError(RuntimeError):
    """Raised when habit state cannot be read from or written to durable storage."""


class HabitFileStore:
    """Owns the JSON document and serializes every read-modify-write against it.

    The whole document is rewritten on each save. Writes go to a sibling
    temporary file first and are moved into place, so readers never observe a
    half-written document.
    """

    def __init__(self, path: Path | str, *, default_name: str = DEFAULT_HABIT_NAME):
        self.path = Path(path)
        self.default_name = default_name
        self._lock = threading.RLock()

    def _default_state(self) -> HabitState:
        return HabitState.empty(self.default_name)

    def ensure_initialized(self) -> None:
        """Create the document with the default habit if it does not exist yet."""

        with self._lock:
            if self.path.exists():
                return
            logger.info("Creating habit data file", extra={"path": str(self.path)})
            self._write(self._default_state())

    def load(self) -> HabitState:
        """Read the current state, substituting defaults for a missing or malformed document."""

        with self._lock:
            try:
                raw = self.path.read_bytes()
            except FileNotFoundError:
                return self._default_state()
            except OSError:
                logger.exception("Error reading data file", extra={"path": str(self.path)})
                return self._default_state()

            try:
                document = HabitDocument.model_validate(json.loads(raw))
            except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
                logger.warning(
                    "Malformed habit data file, using defaults",
                    extra={"path": str(self.path), "error": str(exc)},
                )
                return self._default_state()
            return document.habit

    def save(self, state: HabitState) -> None:
        with self._lock:
            self._write(state)

    def update(self, mutate: Callable[[HabitState], HabitState]) -> HabitState:
        """Apply ``mutate`` to the current state and persist the result under the store lock.

        The new state is returned only once it has been written; a failed write
        raises :class:`StorageError` and leaves the previous document in place.
        """

        with self._lock:
            new_state = mutate(self.load())
            self._write(new_state)
            return new_state

    def _write(self, state: HabitState) -> None:
        document = HabitDocument(habit=state)
        text = json.dumps(document.model_dump(mode="json"), indent=2)
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.exception("Error writing data file", extra={"path": str(self.path)})
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write habit data to {self.path}") from exc


__all__ = ["HabitFileStore", "StorageError"]
