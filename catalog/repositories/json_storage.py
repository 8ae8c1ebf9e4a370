"""
JSON file persistence adapter.

Each collection lives in ``<data_dir>/<name>.json`` as an indented JSON array.
Writes go to a temporary file in the same directory and are moved into place
with ``os.replace`` so readers only ever see a complete document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from catalog.repositories.base import CollectionStore, CorruptCollection, StorageUnavailable, check_records

logger = logging.getLogger(__name__)


class JsonCollectionStore(CollectionStore):
    def __init__(self, data_dir: str | os.PathLike) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{self.check_name(name)}.json"

    def load(self, name: str) -> list[dict]:
        path = self.path_for(name)
        if not path.exists():
            return []
        try:
            raw = path.read_bytes()
        except OSError as exc:
            logger.error("Failed to read collection %s from %s: %s", name, path, exc)
            raise StorageUnavailable(name, str(exc)) from exc
        try:
            # UnicodeDecodeError is a ValueError too
            data = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            logger.error("Collection %s at %s is not valid UTF-8 JSON: %s", name, path, exc)
            raise CorruptCollection(name, f"invalid JSON: {exc}") from exc
        try:
            return check_records(name, data)
        except CorruptCollection as exc:
            logger.error("Collection %s at %s: %s", name, path, exc.message)
            raise

    def save(self, name: str, records: Iterable[dict]) -> None:
        path = self.path_for(name)
        payload = json.dumps(list(records), ensure_ascii=False, indent=2)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("Failed to write collection %s to %s: %s", name, path, exc)
            raise StorageUnavailable(name, str(exc)) from exc
        logger.debug("Saved %s collection to %s", name, path)
