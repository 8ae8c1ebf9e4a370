"""
Utility helpers shared across repositories/services.
"""

import uuid
from datetime import datetime, timezone
from typing import Any


def now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id() -> str:
    return str(uuid.uuid4())


def canonical_id(value: Any) -> str:
    """
    Canonical string form used for every identifier comparison.

    ``None`` maps to an empty string so that a missing id never matches a real one.
    """
    if value is None:
        return ""
    return str(value)
