"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return float(value)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Tiny Habit Logger"
    DATA_FILENAME = "data.json"
    LOCAL_DB_FILENAME = "habit_tracker.db"
    LOCAL_FILE_FILENAME = "local_storage.json"
    DEFAULT_HABIT_NAME = "Drink Water"
    DEFAULT_API_URL = "http://localhost:5000/api"
    DEFAULT_PORT = 5000

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("TINYHABIT_DEV_MODE", default=True)
        self.HABIT_NAME = os.getenv("TINYHABIT_HABIT_NAME", self.DEFAULT_HABIT_NAME)
        self.DATA_FILE = Path(
            os.getenv("TINYHABIT_DATA_FILE", str(self.DATA_DIR / self.DATA_FILENAME))
        )
        self.API_URL = os.getenv("TINYHABIT_API_URL", self.DEFAULT_API_URL).rstrip("/")
        self.API_TIMEOUT = _env_float("TINYHABIT_API_TIMEOUT")
        self.LOCAL_DB = Path(
            os.getenv("TINYHABIT_LOCAL_DB", str(self.DATA_DIR / self.LOCAL_DB_FILENAME))
        )
        self.LOCAL_FILE = Path(
            os.getenv("TINYHABIT_LOCAL_FILE", str(self.DATA_DIR / self.LOCAL_FILE_FILENAME))
        )
        self.PORT = int(os.getenv("PORT", str(self.DEFAULT_PORT)))

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the JSON document, logs and client store live."""

        data_root = os.getenv("TINYHABIT_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def local_database_url(self) -> str:
        return f"sqlite:///{self.LOCAL_DB}"


class DevConfig(BaseConfig):
    """Development configuration with verbose console logging."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
