"""SQLAlchemy models mirroring the JSON collection documents."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, JSON, func

from .session import Base


class CollectionDocument(Base):
    """One row per collection; ``payload`` holds the whole record list."""

    __tablename__ = "collections"

    name = Column(String(64), primary_key=True)
    payload = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
