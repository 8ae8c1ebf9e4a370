"""Read-only report of ratings/feedback whose resource no longer exists."""
from __future__ import annotations

from dataclasses import dataclass, field

from catalog.core.utils import canonical_id
from catalog.repositories.base import FEEDBACK, RATINGS, RESOURCES, CollectionStore


@dataclass
class OrphanReport:
    ratings: list[dict] = field(default_factory=list)
    feedback: list[dict] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.ratings) + len(self.feedback)


def find_orphans(store: CollectionStore) -> OrphanReport:
    """Deleting a resource does not cascade; this lists what was left behind. Nothing is removed."""
    known = {canonical_id(r.get("id")) for r in store.load(RESOURCES)}
    return OrphanReport(
        ratings=[r for r in store.load(RATINGS) if canonical_id(r.get("resourceId")) not in known],
        feedback=[f for f in store.load(FEEDBACK) if canonical_id(f.get("resourceId")) not in known],
    )
