"""Client-side access to the habit: HTTP API, device store and sync policy."""

from .api import ApiClient, ApiError
from .gateway import HabitView, PersistenceGateway, SyncStatus
from .local_store import KeyValueFileStore, LocalStore, SnapshotStore

__all__ = [
    "ApiClient",
    "ApiError",
    "HabitView",
    "KeyValueFileStore",
    "LocalStore",
    "PersistenceGateway",
    "SnapshotStore",
    "SyncStatus",
]
