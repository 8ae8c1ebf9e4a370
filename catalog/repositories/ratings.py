"""Write-once ratings, keyed by resource."""
from __future__ import annotations

import logging

from catalog.core.utils import canonical_id, new_id, now_iso
from catalog.repositories.base import RATINGS, CollectionStore

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


class RatingRepository:
    """Ratings can be added and listed; there is no update or delete."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    def list_all(self) -> list[dict]:
        return self.store.load(RATINGS)

    def list_for_resource(self, resource_id) -> list[dict]:
        key = canonical_id(resource_id)
        return [r for r in self.list_all() if canonical_id(r.get("resourceId")) == key]

    def add_for_resource(self, resource_id, rating_value: int, user_id=None) -> dict:
        """Append a rating. ``rating_value`` must already be validated."""
        rating = {
            "id": new_id(),
            "resourceId": canonical_id(resource_id),
            "ratingValue": rating_value,
            "userId": str(user_id) if user_id else ANONYMOUS,
            "timestamp": now_iso(),
        }
        with self.store.locked(RATINGS):
            ratings = self.store.load(RATINGS)
            ratings.append(rating)
            self.store.save(RATINGS, ratings)
        logger.info("Rating %s (%s) added for resource %s", rating["id"], rating_value, rating["resourceId"])
        return rating
