"""Aggregates derived from the ratings collection at read time."""
from __future__ import annotations

from typing import Iterable, Optional

from catalog.core.utils import canonical_id


def _rating_value(rating: dict) -> Optional[float]:
    value = rating.get("ratingValue")
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def average_rating(resource_id, all_ratings: Iterable[dict]) -> float:
    """
    Arithmetic mean of ``ratingValue`` for one resource, 0 when it has no ratings.

    Records without a numeric ``ratingValue`` are left out of the mean.
    """
    key = canonical_id(resource_id)
    values = [
        value
        for value in (_rating_value(r) for r in all_ratings if canonical_id(r.get("resourceId")) == key)
        if value is not None
    ]
    if not values:
        return 0
    return sum(values) / len(values)
