"""Input checks run before any repository mutation."""
from __future__ import annotations

import re
from typing import Any, Mapping

from catalog.domain.results import Accepted, ValidationError

RATING_MIN = 1
RATING_MAX = 5
FEEDBACK_MIN_LENGTH = 10
FEEDBACK_MAX_LENGTH = 500

# Keys the server owns; callers may send them but they never reach storage.
RESERVED_RESOURCE_KEYS = {"id", "createdAt", "averageRating"}

_INT_PATTERN = re.compile(r"[+-]?\d+")


def validate_resource(data: Any) -> Accepted | ValidationError:
    """A new resource needs a truthy ``title`` and ``type``."""
    if not isinstance(data, Mapping):
        return ValidationError("Request body must be a JSON object.")
    if not data.get("title") or not data.get("type"):
        return ValidationError("Resource title and type are required.")
    return Accepted(dict(data))


def validate_resource_update(partial: Any) -> Accepted | ValidationError:
    """
    Accept a non-empty partial update and return it without server-owned keys.

    ``title``/``type`` may be omitted, but when present they must stay truthy.
    """
    if not isinstance(partial, Mapping) or not partial:
        return ValidationError("No data to update.")
    cleaned = {key: value for key, value in partial.items() if key not in RESERVED_RESOURCE_KEYS}
    if not cleaned:
        return ValidationError("No data to update.")
    for key in ("title", "type"):
        if key in cleaned and not cleaned[key]:
            return ValidationError(f"Resource {key} must not be empty.")
    return Accepted(cleaned)


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_PATTERN.fullmatch(text):
            return int(text)
    return None


def validate_rating(value: Any) -> Accepted | ValidationError:
    """Coerce ``ratingValue`` to an int within [1, 5]."""
    rating = _coerce_int(value)
    if rating is None:
        return ValidationError("Rating must be an integer.")
    if rating < RATING_MIN or rating > RATING_MAX:
        return ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}.")
    return Accepted(rating)


def validate_feedback(text: Any) -> Accepted | ValidationError:
    """Feedback text is trimmed, then must be 10..500 characters long."""
    if not isinstance(text, str) or not text.strip():
        return ValidationError("Feedback text is required and must not be empty.")
    trimmed = text.strip()
    if len(trimmed) < FEEDBACK_MIN_LENGTH or len(trimmed) > FEEDBACK_MAX_LENGTH:
        return ValidationError(
            f"Feedback text must be between {FEEDBACK_MIN_LENGTH} and {FEEDBACK_MAX_LENGTH} characters."
        )
    return Accepted(trimmed)
