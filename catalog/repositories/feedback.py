"""Feedback items, always addressed by the (resourceId, feedbackId) pair."""
from __future__ import annotations

import logging

from catalog.core.utils import canonical_id, new_id, now_iso
from catalog.domain.results import NotFound
from catalog.repositories.base import FEEDBACK, CollectionStore
from catalog.repositories.ratings import ANONYMOUS

logger = logging.getLogger(__name__)


def _not_found(resource_id: str, feedback_id: str) -> NotFound:
    return NotFound(f"Feedback {feedback_id} for resource {resource_id} not found.")


class FeedbackRepository:
    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    @staticmethod
    def _matches(item: dict, resource_id: str, feedback_id: str) -> bool:
        return canonical_id(item.get("id")) == feedback_id and canonical_id(item.get("resourceId")) == resource_id

    def list_for_resource(self, resource_id) -> list[dict]:
        key = canonical_id(resource_id)
        return [f for f in self.store.load(FEEDBACK) if canonical_id(f.get("resourceId")) == key]

    def add_for_resource(self, resource_id, feedback_text: str, user_id=None) -> dict:
        item = {
            "id": new_id(),
            "resourceId": canonical_id(resource_id),
            "feedbackText": feedback_text.strip(),
            "userId": str(user_id) if user_id else ANONYMOUS,
            "timestamp": now_iso(),
        }
        with self.store.locked(FEEDBACK):
            items = self.store.load(FEEDBACK)
            items.append(item)
            self.store.save(FEEDBACK, items)
        logger.info("Feedback %s added for resource %s", item["id"], item["resourceId"])
        return item

    def update_for_resource(self, resource_id, feedback_id, feedback_text: str) -> dict | NotFound:
        """Replace the text and refresh the timestamp; other fields are kept."""
        rid, fid = canonical_id(resource_id), canonical_id(feedback_id)
        with self.store.locked(FEEDBACK):
            items = self.store.load(FEEDBACK)
            for index, item in enumerate(items):
                if self._matches(item, rid, fid):
                    break
            else:
                return _not_found(rid, fid)
            updated = {**item, "feedbackText": feedback_text.strip(), "timestamp": now_iso()}
            items[index] = updated
            self.store.save(FEEDBACK, items)
        logger.info("Feedback %s for resource %s updated", fid, rid)
        return updated

    def delete_for_resource(self, resource_id, feedback_id) -> bool | NotFound:
        rid, fid = canonical_id(resource_id), canonical_id(feedback_id)
        with self.store.locked(FEEDBACK):
            items = self.store.load(FEEDBACK)
            remaining = [item for item in items if not self._matches(item, rid, fid)]
            if len(remaining) == len(items):
                return _not_found(rid, fid)
            self.store.save(FEEDBACK, remaining)
        logger.info("Feedback %s for resource %s deleted", fid, rid)
        return True
