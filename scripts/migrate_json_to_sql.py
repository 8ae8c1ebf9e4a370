#!/usr/bin/env python3
"""
One-off migration: JSON collection files -> SQL collection store.

Uso:
  DATABASE_URL=postgresql://... python scripts/migrate_json_to_sql.py [--data-dir ./data]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garante que o pacote catalog seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.core.config import get_settings  # noqa: E402
from catalog.db.create_tables import create_all  # noqa: E402
from catalog.repositories.base import FEEDBACK, RATINGS, RESOURCES  # noqa: E402
from catalog.repositories.json_storage import JsonCollectionStore  # noqa: E402
from catalog.repositories.sql_storage import SQLCollectionStore  # noqa: E402

COLLECTIONS = (RESOURCES, RATINGS, FEEDBACK)


def migrate(data_dir: Path, source: JsonCollectionStore | None = None, target: SQLCollectionStore | None = None) -> dict[str, int]:
    """Copy every collection; returns the number of records copied per collection."""
    source = source or JsonCollectionStore(data_dir)
    target = target or SQLCollectionStore()
    copied: dict[str, int] = {}
    for name in COLLECTIONS:
        records = source.load(name)
        with target.locked(name):
            target.save(name, records)
        copied[name] = len(records)
    return copied


def main() -> None:
    ap = argparse.ArgumentParser(description="Copiar colecoes JSON para o banco SQL")
    ap.add_argument("--data-dir", default=get_settings().data_dir, help="Diretorio com resources.json, ratings.json, feedback.json")
    args = ap.parse_args()

    data_dir = Path(args.data_dir)
    if not data_dir.is_dir():
        raise SystemExit(f"Diretorio nao encontrado: {data_dir}")
    create_all()
    for name, count in migrate(data_dir).items():
        print(f"  {name}: {count} registros")
    print("JSON collections migrated successfully.")


if __name__ == "__main__":
    main()
