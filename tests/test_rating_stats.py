from __future__ import annotations

import itertools
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.services.rating_stats import average_rating  # noqa: E402


def _ratings(resource_id, values):
    return [{"id": str(i), "resourceId": resource_id, "ratingValue": v} for i, v in enumerate(values)]


def test_no_ratings_gives_zero():
    assert average_rating("r1", []) == 0
    assert average_rating("r1", _ratings("r2", [5, 5])) == 0


def test_mean_ignores_other_resources():
    ratings = _ratings("r1", [4, 5]) + _ratings("r2", [1, 1, 1])
    assert average_rating("r1", ratings) == 4.5


def test_mean_is_not_rounded():
    assert average_rating("r1", _ratings("r1", [1, 2, 2])) == 5 / 3


def test_mean_is_independent_of_order():
    values = [1, 3, 4, 5, 5]
    expected = sum(values) / len(values)
    for perm in itertools.permutations(values):
        assert average_rating("r1", _ratings("r1", perm)) == expected


def test_resource_ids_compare_as_strings():
    ratings = [{"resourceId": 7, "ratingValue": 2}, {"resourceId": "7", "ratingValue": "4"}]
    assert average_rating("7", ratings) == 3


def test_ratings_without_value_are_left_out():
    ratings = _ratings("r1", [4, 5]) + [
        {"id": "x", "resourceId": "r1"},
        {"id": "y", "resourceId": "r1", "ratingValue": None},
        {"id": "z", "resourceId": "r1", "ratingValue": "n/a"},
    ]
    assert average_rating("r1", ratings) == 4.5
    assert average_rating("r2", [{"resourceId": "r2"}]) == 0
