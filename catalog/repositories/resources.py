"""CRUD over the ``resources`` collection."""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from catalog.core.utils import canonical_id, new_id, now_iso
from catalog.domain.results import NotFound, ValidationError
from catalog.domain.validation import RESERVED_RESOURCE_KEYS, validate_resource_update
from catalog.repositories.base import RESOURCES, CollectionStore
from catalog.repositories.ratings import RatingRepository
from catalog.services.rating_stats import average_rating

logger = logging.getLogger(__name__)


def _not_found(resource_id: str) -> NotFound:
    return NotFound(f"Resource with ID {resource_id} not found.")


class ResourceRepository:
    """
    Resources with caller-defined extra fields.

    ``averageRating`` is attached on single-item reads only and is never
    written back to storage.
    """

    def __init__(self, store: CollectionStore, ratings: Optional[RatingRepository] = None) -> None:
        self.store = store
        self.ratings = ratings or RatingRepository(store)

    def list(self, type: Optional[str] = None, author_id: Optional[str] = None) -> list[dict]:
        resources = self.store.load(RESOURCES)
        if type is not None:
            wanted = canonical_id(type)
            resources = [r for r in resources if canonical_id(r.get("type")) == wanted]
        if author_id is not None:
            wanted = canonical_id(author_id)
            resources = [r for r in resources if canonical_id(r.get("authorId")) == wanted]
        return resources

    def get_by_id(self, resource_id) -> dict | NotFound:
        key = canonical_id(resource_id)
        resource = next((r for r in self.store.load(RESOURCES) if canonical_id(r.get("id")) == key), None)
        if resource is None:
            return _not_found(key)
        return {**resource, "averageRating": average_rating(key, self.ratings.list_all())}

    def create(self, data: Mapping) -> dict:
        """Store a resource whose data already passed ``validate_resource``."""
        fields = {k: v for k, v in data.items() if k not in RESERVED_RESOURCE_KEYS}
        resource = {"id": new_id(), **fields, "createdAt": now_iso()}
        with self.store.locked(RESOURCES):
            resources = self.store.load(RESOURCES)
            resources.append(resource)
            self.store.save(RESOURCES, resources)
        logger.info("Resource %s created (type=%s)", resource["id"], resource.get("type"))
        return resource

    def update(self, resource_id, partial: Mapping) -> dict | NotFound | ValidationError:
        """Shallow-merge ``partial`` over the stored record; ``id`` and ``createdAt`` never change."""
        checked = validate_resource_update(partial)
        if isinstance(checked, ValidationError):
            return checked
        key = canonical_id(resource_id)
        with self.store.locked(RESOURCES):
            resources = self.store.load(RESOURCES)
            for index, resource in enumerate(resources):
                if canonical_id(resource.get("id")) == key:
                    break
            else:
                return _not_found(key)
            merged = {**resource, **checked.value}
            resources[index] = merged
            self.store.save(RESOURCES, resources)
        logger.info("Resource %s updated (%s)", key, ", ".join(sorted(checked.value)))
        return merged

    def delete(self, resource_id) -> bool | NotFound:
        """Remove a resource. Its ratings and feedback are left in place."""
        key = canonical_id(resource_id)
        with self.store.locked(RESOURCES):
            resources = self.store.load(RESOURCES)
            remaining = [r for r in resources if canonical_id(r.get("id")) != key]
            if len(remaining) == len(resources):
                return _not_found(key)
            self.store.save(RESOURCES, remaining)
        logger.info("Resource %s deleted", key)
        return True
