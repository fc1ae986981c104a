"""Infrastructure implementations."""

from .file_store import HabitFileStore, StorageError

__all__ = ["HabitFileStore", "StorageError"]
