"""Storage and service wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.file_store import HabitFileStore
from .services.habits import HabitService

_EXTENSION_KEY = "tinyhabit"


def init_store(app: Flask) -> HabitService:
    """Create the habit file store from app configuration and attach the service."""

    config: BaseConfig = app.config["TINYHABIT_CONFIG"]
    store = HabitFileStore(config.DATA_FILE, default_name=config.HABIT_NAME)
    store.ensure_initialized()

    service = HabitService(store)
    app.extensions[_EXTENSION_KEY] = service
    return service


def get_service() -> HabitService:
    """Return the habit service bound to the current app."""

    service = current_app.extensions.get(_EXTENSION_KEY)
    if service is None:  # pragma: no cover - exercised in integration tests
        raise RuntimeError("Habit store not initialized")
    return service
