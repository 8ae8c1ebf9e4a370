"""
Persistence adapters.

Collection stores encapsulate where collections live (JSON files, SQL, memory);
the resource/rating/feedback repositories receive a store by injection and
never touch files or sessions directly.
"""
from __future__ import annotations

from catalog.core.config import Settings
from catalog.repositories.base import (
    CollectionStore,
    CorruptCollection,
    StorageError,
    StorageUnavailable,
)


def create_store(settings: Settings) -> CollectionStore:
    """Build the collection store selected by ``STORAGE_BACKEND``."""
    if settings.storage_backend == "sql":
        from catalog.db.session import init_db
        from catalog.repositories.sql_storage import SQLCollectionStore

        init_db()
        return SQLCollectionStore()
    if settings.storage_backend == "memory":
        from catalog.repositories.memory_storage import MemoryCollectionStore

        return MemoryCollectionStore()
    from catalog.repositories.json_storage import JsonCollectionStore

    return JsonCollectionStore(settings.data_dir)


__all__ = [
    "CollectionStore",
    "CorruptCollection",
    "StorageError",
    "StorageUnavailable",
    "create_store",
]
