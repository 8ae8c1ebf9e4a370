"""In-process collection store, used by tests and ``STORAGE_BACKEND=memory``."""
from __future__ import annotations

import copy
from typing import Iterable

from catalog.repositories.base import CollectionStore


class MemoryCollectionStore(CollectionStore):
    def __init__(self, initial: dict[str, list[dict]] | None = None) -> None:
        super().__init__()
        self._collections: dict[str, list[dict]] = {}
        for name, records in (initial or {}).items():
            self.save(name, records)

    def load(self, name: str) -> list[dict]:
        # Callers mutate what they load; hand out copies so only save() changes state.
        return copy.deepcopy(self._collections.get(self.check_name(name), []))

    def save(self, name: str, records: Iterable[dict]) -> None:
        self._collections[self.check_name(name)] = copy.deepcopy(list(records))
