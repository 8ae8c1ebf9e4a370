"""
Resource/rating/feedback repositories over an in-memory store.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import catalog.repositories.feedback as feedback_module  # noqa: E402
from catalog.domain.results import NotFound, ValidationError  # noqa: E402
from catalog.repositories.feedback import FeedbackRepository  # noqa: E402
from catalog.repositories.memory_storage import MemoryCollectionStore  # noqa: E402
from catalog.repositories.ratings import RatingRepository  # noqa: E402
from catalog.repositories.resources import ResourceRepository  # noqa: E402


class CountingStore(MemoryCollectionStore):
    def __init__(self, initial=None):
        self.loads = 0
        self.saves = 0
        super().__init__(initial)
        self.saves = 0

    def load(self, name):
        self.loads += 1
        return super().load(name)

    def save(self, name, records):
        self.saves += 1
        super().save(name, records)


@pytest.fixture()
def store():
    return CountingStore()


@pytest.fixture()
def repos(store):
    ratings = RatingRepository(store)
    return ResourceRepository(store, ratings), ratings, FeedbackRepository(store)


def test_create_then_get_has_zero_average(repos):
    resources, _, _ = repos
    created = resources.create({"title": "Intro to X", "type": "article"})
    assert created["id"]
    assert created["createdAt"].endswith("Z")

    fetched = resources.get_by_id(created["id"])
    assert fetched["title"] == "Intro to X"
    assert fetched["type"] == "article"
    assert fetched["averageRating"] == 0


def test_create_assigns_fresh_ids_and_ignores_caller_id(repos):
    resources, _, _ = repos
    first = resources.create({"title": "A", "type": "t", "id": "mine", "createdAt": "1999"})
    second = resources.create({"title": "B", "type": "t"})
    assert first["id"] != "mine"
    assert first["createdAt"] != "1999"
    assert first["id"] != second["id"]


def test_average_rating_is_not_persisted(repos, store):
    resources, ratings, _ = repos
    created = resources.create({"title": "A", "type": "t"})
    ratings.add_for_resource(created["id"], 3)
    assert resources.get_by_id(created["id"])["averageRating"] == 3
    assert "averageRating" not in store.load("resources")[0]


def test_list_filters_are_conjunctive(repos):
    resources, _, _ = repos
    resources.create({"title": "A", "type": "article", "authorId": "u1"})
    resources.create({"title": "B", "type": "video", "authorId": "u1"})
    resources.create({"title": "C", "type": "article", "authorId": "u2"})
    resources.create({"title": "D", "type": "article"})

    assert len(resources.list()) == 4
    assert {r["title"] for r in resources.list(type="article")} == {"A", "C", "D"}
    assert {r["title"] for r in resources.list(author_id="u1")} == {"A", "B"}
    assert [r["title"] for r in resources.list(type="article", author_id="u1")] == ["A"]
    assert resources.list(type="podcast") == []


def test_ids_and_filters_compare_as_strings():
    store = MemoryCollectionStore({"resources": [{"id": 7, "title": "Legacy", "type": 1, "authorId": 42}]})
    resources = ResourceRepository(store)
    assert resources.get_by_id("7")["title"] == "Legacy"
    assert len(resources.list(type="1", author_id="42")) == 1


def test_get_unknown_is_not_found(repos):
    resources, _, _ = repos
    assert isinstance(resources.get_by_id("missing"), NotFound)


def test_update_merges_shallowly(repos):
    resources, _, _ = repos
    created = resources.create({"title": "A", "type": "t", "level": 1, "tags": ["x"]})
    updated = resources.update(created["id"], {"title": "A2", "tags": ["y"], "new": True})
    assert updated["title"] == "A2"
    assert updated["tags"] == ["y"]
    assert updated["level"] == 1
    assert updated["new"] is True
    assert updated["id"] == created["id"]
    assert updated["createdAt"] == created["createdAt"]
    assert resources.get_by_id(created["id"])["title"] == "A2"


def test_update_cannot_change_id(repos):
    resources, _, _ = repos
    created = resources.create({"title": "A", "type": "t"})
    updated = resources.update(created["id"], {"id": "other", "title": "B"})
    assert updated["id"] == created["id"]


def test_empty_update_is_rejected_without_touching_storage(repos, store):
    resources, _, _ = repos
    created = resources.create({"title": "A", "type": "t"})
    loads, saves = store.loads, store.saves

    result = resources.update(created["id"], {})

    assert isinstance(result, ValidationError)
    assert (store.loads, store.saves) == (loads, saves)


def test_update_unknown_is_not_found_without_write(repos, store):
    resources, _, _ = repos
    saves = store.saves
    assert isinstance(resources.update("missing", {"title": "X"}), NotFound)
    assert store.saves == saves


def test_second_delete_reports_not_found(repos, store):
    resources, _, _ = repos
    keep = resources.create({"title": "Keep", "type": "t"})
    gone = resources.create({"title": "Gone", "type": "t"})

    assert resources.delete(gone["id"]) is True
    saves = store.saves
    snapshot = store.load("resources")

    assert isinstance(resources.delete(gone["id"]), NotFound)
    assert store.saves == saves
    assert store.load("resources") == snapshot
    assert [r["id"] for r in snapshot] == [keep["id"]]


def test_delete_leaves_ratings_and_feedback(repos, store):
    resources, ratings, feedback = repos
    created = resources.create({"title": "A", "type": "t"})
    ratings.add_for_resource(created["id"], 4)
    feedback.add_for_resource(created["id"], "Useful enough text")
    resources.delete(created["id"])
    assert len(store.load("ratings")) == 1
    assert len(store.load("feedback")) == 1


def test_rating_defaults_user_to_anonymous(repos):
    _, ratings, _ = repos
    anon = ratings.add_for_resource("r1", 5)
    named = ratings.add_for_resource("r1", 2, user_id=17)
    assert anon["userId"] == "anonymous"
    assert named["userId"] == "17"
    assert anon["resourceId"] == "r1"
    assert set(anon) == {"id", "resourceId", "ratingValue", "userId", "timestamp"}
    assert [r["ratingValue"] for r in ratings.list_for_resource("r1")] == [5, 2]
    assert ratings.list_for_resource("r2") == []


def test_intro_to_x_scenario(repos, monkeypatch):
    resources, ratings, feedback = repos
    r1 = resources.create({"title": "Intro to X", "type": "article"})["id"]
    ratings.add_for_resource(r1, 4)
    ratings.add_for_resource(r1, 5)
    assert resources.get_by_id(r1)["averageRating"] == 4.5

    monkeypatch.setattr(feedback_module, "now_iso", lambda: "2024-01-01T00:00:00.000Z")
    item = feedback.add_for_resource(r1, "  Great article, very helpful!  ", user_id="u1")
    assert item["feedbackText"] == "Great article, very helpful!"
    assert item["userId"] == "u1"
    assert feedback.list_for_resource(r1) == [item]

    monkeypatch.setattr(feedback_module, "now_iso", lambda: "2024-01-02T00:00:00.000Z")
    updated = feedback.update_for_resource(r1, item["id"], "Still great!")
    assert updated["feedbackText"] == "Still great!"
    assert updated["timestamp"] == "2024-01-02T00:00:00.000Z"
    assert updated["userId"] == "u1"
    assert updated["id"] == item["id"]

    assert feedback.delete_for_resource(r1, item["id"]) is True
    assert feedback.list_for_resource(r1) == []


def test_feedback_is_scoped_by_resource(repos, store):
    _, _, feedback = repos
    item = feedback.add_for_resource("r1", "Text long enough")
    saves = store.saves

    assert isinstance(feedback.update_for_resource("r2", item["id"], "Another long text"), NotFound)
    assert isinstance(feedback.delete_for_resource("r2", item["id"]), NotFound)
    assert isinstance(feedback.delete_for_resource("r1", "missing"), NotFound)
    assert store.saves == saves
    assert feedback.list_for_resource("r1") == [item]
