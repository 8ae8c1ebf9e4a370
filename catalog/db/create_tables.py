"""Utility script to create the collection table in DATABASE_URL."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .session import init_db


def create_all() -> None:
    init_db()


def main() -> None:
    try:
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
