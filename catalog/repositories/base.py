"""
Collection store contract shared by every persistence backend.

A collection is a named, ordered list of JSON records. Backends implement
``load``/``save``; the per-collection write lock lives here so that a full
load-mutate-save cycle can be serialized regardless of backend.
"""
from __future__ import annotations

import re
import threading
from contextlib import contextmanager
from typing import Iterable, Iterator

RESOURCES = "resources"
RATINGS = "ratings"
FEEDBACK = "feedback"

COLLECTION_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")


class StorageError(Exception):
    """Base class for unexpected persistence failures."""

    def __init__(self, collection: str, message: str):
        super().__init__(f"{collection}: {message}")
        self.collection = collection
        self.message = message


class CorruptCollection(StorageError):
    """Stored document could not be parsed as a list of records."""


class StorageUnavailable(StorageError):
    """The backing medium could not be read or written."""


def check_records(name: str, data: object) -> list[dict]:
    """Raise CorruptCollection unless ``data`` is a list of JSON objects."""
    if not isinstance(data, list):
        raise CorruptCollection(name, "document is not a JSON array")
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise CorruptCollection(name, f"record {index} is not a JSON object")
    return data


class CollectionStore:
    """Base class: named collections plus one re-entrant write lock per name."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def check_name(self, name: str) -> str:
        if not isinstance(name, str) or not COLLECTION_NAME_PATTERN.fullmatch(name):
            raise ValueError(f"Invalid collection name: {name!r}")
        return name

    def _lock_for(self, name: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = threading.RLock()
                self._locks[name] = lock
            return lock

    @contextmanager
    def locked(self, name: str) -> Iterator[None]:
        """Hold the write lock of ``name`` for a whole load-mutate-save cycle."""
        with self._lock_for(self.check_name(name)):
            yield

    def load(self, name: str) -> list[dict]:
        raise NotImplementedError

    def save(self, name: str, records: Iterable[dict]) -> None:
        raise NotImplementedError
