"""
Tests for the JSON file collection store.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Garante que o pacote catalog seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.repositories.base import CorruptCollection, StorageUnavailable  # noqa: E402
from catalog.repositories.json_storage import JsonCollectionStore  # noqa: E402
from catalog.repositories.memory_storage import MemoryCollectionStore  # noqa: E402


@pytest.fixture()
def store(tmp_path):
    return JsonCollectionStore(tmp_path / "data")


def test_missing_collection_loads_empty(store):
    assert store.load("resources") == []
    assert not store.data_dir.exists()


def test_save_creates_directory_and_indented_file(store):
    store.save("resources", [{"id": "r1", "title": "Intro"}])
    path = store.data_dir / "resources.json"
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert json.loads(text) == [{"id": "r1", "title": "Intro"}]


def test_round_trip_is_lossless(store):
    records = [
        {"id": "a", "title": "Über Ärger – ✓", "tags": ["x", "y"], "meta": {"n": None, "ok": True}},
        {"id": "b", "score": 4.5, "count": 0, "nested": [[1, 2], {"k": "v"}]},
    ]
    store.save("feedback", records)
    assert store.load("feedback") == records


def test_saving_unmodified_load_keeps_records(store):
    store.save("ratings", [{"id": "1", "ratingValue": 4}, {"id": "2", "ratingValue": 5}])
    before = store.load("ratings")
    store.save("ratings", store.load("ratings"))
    assert store.load("ratings") == before


def test_no_temp_files_left_behind(store):
    store.save("resources", [{"id": "1"}])
    store.save("resources", [{"id": "2"}])
    assert sorted(p.name for p in store.data_dir.iterdir()) == ["resources.json"]


def test_malformed_document_raises_corrupt(store):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "resources.json").write_text("[{\"id\": ", encoding="utf-8")
    with pytest.raises(CorruptCollection) as exc_info:
        store.load("resources")
    assert exc_info.value.collection == "resources"


def test_non_array_document_raises_corrupt(store):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "ratings.json").write_text("{\"id\": 1}", encoding="utf-8")
    with pytest.raises(CorruptCollection):
        store.load("ratings")


def test_unwritable_location_raises_unavailable(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    store = JsonCollectionStore(blocker)
    with pytest.raises(StorageUnavailable):
        store.save("resources", [])


def test_collection_names_cannot_escape_data_dir(store):
    with pytest.raises(ValueError):
        store.load("../secrets")


def test_memory_store_hands_out_copies():
    store = MemoryCollectionStore({"resources": [{"id": "1", "title": "A"}]})
    loaded = store.load("resources")
    loaded[0]["title"] = "changed"
    loaded.append({"id": "2"})
    assert store.load("resources") == [{"id": "1", "title": "A"}]


def test_invalid_utf8_raises_corrupt(store):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "resources.json").write_bytes(b'[{"title": "\xff\xfe"}]')
    with pytest.raises(CorruptCollection):
        store.load("resources")


@pytest.mark.parametrize("document", ["[1, 2]", "[{\"id\": \"a\"}, \"b\"]", "[null]", "[[]]"])
def test_non_object_records_raise_corrupt(store, document):
    store.data_dir.mkdir(parents=True)
    (store.data_dir / "resources.json").write_text(document, encoding="utf-8")
    with pytest.raises(CorruptCollection) as exc_info:
        store.load("resources")
    assert "is not a JSON object" in exc_info.value.message
