"""Collection store backed by SQLAlchemy: one JSON payload row per collection."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, ContextManager, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.db.models import CollectionDocument
from catalog.db.session import get_session
from catalog.repositories.base import CollectionStore, CorruptCollection, StorageUnavailable, check_records

logger = logging.getLogger(__name__)


class SQLCollectionStore(CollectionStore):
    """Each ``save`` replaces the row inside a single transaction."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]] = get_session) -> None:
        super().__init__()
        self._session_factory = session_factory

    def load(self, name: str) -> list[dict]:
        self.check_name(name)
        try:
            with self._session_factory() as session:
                entity = session.get(CollectionDocument, name)
                payload = entity.payload if entity else None
        except SQLAlchemyError as exc:
            logger.error("Failed to read collection %s: %s", name, exc)
            raise StorageUnavailable(name, str(exc)) from exc
        except ValueError as exc:
            logger.error("Collection %s holds invalid JSON: %s", name, exc)
            raise CorruptCollection(name, f"invalid JSON: {exc}") from exc
        if payload is None:
            return []
        try:
            return check_records(name, payload)
        except CorruptCollection as exc:
            logger.error("Collection %s: %s", name, exc.message)
            raise

    def save(self, name: str, records: Iterable[dict]) -> None:
        self.check_name(name)
        payload = list(records)
        now = datetime.now(timezone.utc)
        try:
            with self._session_factory() as session:
                entity = session.get(CollectionDocument, name)
                if entity is None:
                    session.add(CollectionDocument(name=name, payload=payload, updated_at=now))
                else:
                    entity.payload = payload
                    entity.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to write collection %s: %s", name, exc)
            raise StorageUnavailable(name, str(exc)) from exc
