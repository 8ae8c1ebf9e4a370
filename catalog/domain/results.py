"""Typed outcomes returned by validation checks and repositories."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Accepted:
    """Input passed validation; ``value`` is the normalized form."""

    value: Any = None


@dataclass(frozen=True)
class ValidationError:
    """Bad or missing input. Nothing was read from or written to storage."""

    reason: str


@dataclass(frozen=True)
class NotFound:
    """Target id (or id pair) does not exist. Nothing was written."""

    message: str
