#!/usr/bin/env python3
"""
Listar avaliacoes/feedback cujo recurso nao existe mais (somente leitura).

Uso:
  python scripts/check_orphans.py [--data-dir ./data] [--verbose]

Sai com codigo 1 quando ha orfaos, 0 caso contrario.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.core.config import get_settings  # noqa: E402
from catalog.repositories import StorageError, create_store  # noqa: E402
from catalog.repositories.json_storage import JsonCollectionStore  # noqa: E402
from catalog.services.consistency import find_orphans  # noqa: E402


def main() -> int:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Relatorio de avaliacoes/feedback orfaos")
    ap.add_argument("--data-dir", help="Diretorio das colecoes JSON (default: backend configurado)")
    ap.add_argument("--verbose", action="store_true", help="Listar cada registro orfao")
    args = ap.parse_args()

    store = JsonCollectionStore(args.data_dir) if args.data_dir else create_store(settings)
    try:
        report = find_orphans(store)
    except StorageError as exc:
        sys.stderr.write(f"Erro: {exc}\n")
        return 2

    print(f"Ratings orfaos: {len(report.ratings)}")
    print(f"Feedback orfao: {len(report.feedback)}")
    if args.verbose:
        for rating in report.ratings:
            print(f"  rating {rating.get('id')} -> resource {rating.get('resourceId')}")
        for item in report.feedback:
            print(f"  feedback {item.get('id')} -> resource {item.get('resourceId')}")
    return 1 if report.total else 0


if __name__ == "__main__":
    raise SystemExit(main())
