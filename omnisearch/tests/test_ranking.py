"""Tests for result ordering and the recency boost."""

from functools import cmp_to_key

import pytest

from omnisearch.engine.models import ResultKind, SearchResult, SourceKind
from omnisearch.engine.ranking import (
    RECENT_OPEN_BOOST_MS, compare_results, recency_bonus, sort_results
)

NOW = 1_700_000_000_000


def make_result(result_id: str, title: str, score: int = 100, updated_at=None) -> SearchResult:
    return SearchResult(
        id=result_id,
        kind=ResultKind.FILE,
        title=title,
        score=score,
        source_kind=SourceKind.FILES,
        updated_at=updated_at,
    )


class TestRecencyBonus:

    @pytest.mark.parametrize("opened_at,expected", [
        (None, 0),
        (NOW, 20),
        (NOW + 5_000, 20),
        (NOW - RECENT_OPEN_BOOST_MS, 0),
        (NOW - 2 * RECENT_OPEN_BOOST_MS, 0),
        (NOW - RECENT_OPEN_BOOST_MS // 2, 10),
        (NOW - RECENT_OPEN_BOOST_MS // 4, 15),
    ])
    def test_linear_decay(self, opened_at, expected):
        recency = {} if opened_at is None else {"r": opened_at}
        assert recency_bonus("r", recency, NOW) == expected

    def test_custom_window_and_bonus(self):
        assert recency_bonus("r", {"r": NOW - 500}, NOW, window_ms=1000, max_bonus=40) == 20


class TestCompareResults:

    def test_recency_boost_wins_at_equal_score(self):
        """An opened result beats a never-opened one with the same score."""
        a = make_result("a", "A")
        b = make_result("b", "B")
        recency = {"b": NOW}

        ordered = sorted([a, b], key=cmp_to_key(lambda x, y: compare_results(x, y, recency, NOW)))

        assert [r.id for r in ordered] == ["b", "a"]

    def test_lower_effective_score_first(self):
        a = make_result("a", "A", score=15)
        b = make_result("b", "B", score=20)
        assert compare_results(a, b, {}, NOW) < 0
        assert compare_results(b, a, {}, NOW) > 0

    def test_recency_cannot_overcome_large_gap(self):
        a = make_result("a", "A", score=20)
        b = make_result("b", "B", score=200)
        assert compare_results(a, b, {"b": NOW}, NOW) < 0

    def test_updated_at_breaks_score_ties(self):
        """More recently updated entities win ties; missing counts as 0."""
        older = make_result("o", "A", updated_at=10)
        newer = make_result("n", "B", updated_at=20)
        missing = make_result("m", "C")

        assert compare_results(newer, older, {}, NOW) < 0
        assert compare_results(missing, older, {}, NOW) > 0

    def test_title_is_final_tie_break(self):
        """Equal scores without recency sort by title ascending."""
        results = [make_result("1", "beta"), make_result("2", "Alpha"), make_result("3", "alpha")]

        ordered = sort_results(results, {}, now=NOW)

        assert [r.title for r in ordered] == ["Alpha", "alpha", "beta"]
        assert compare_results(results[0], results[0], {}, NOW) == 0


def test_sort_results_is_deterministic():
    """Repeated sorts of shuffled input agree for a fixed now."""
    results = [
        make_result(f"id-{i}", f"title-{i % 7}", score=100 + (i % 3), updated_at=i % 4)
        for i in range(40)
    ]
    recency = {"id-3": NOW - 1000, "id-9": NOW - RECENT_OPEN_BOOST_MS // 3}

    first = [r.id for r in sort_results(results, recency, now=NOW)]
    second = [r.id for r in sort_results(list(reversed(results)), recency, now=NOW)]

    assert first == second
    assert first[0] == "id-3"
