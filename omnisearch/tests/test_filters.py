"""Tests for content filter toggling."""

import itertools

import pytest

from omnisearch.engine.filters import (
    ContentFilter, enabled_categories, parse_content_filters, toggle_content_filters
)
from omnisearch.engine.models import SourceKind

ALL = ContentFilter.ALL
FILES = ContentFilter.FILES
THREADS = ContentFilter.THREADS
CONCRETE = [f for f in ContentFilter if f is not ALL]


class TestToggleContentFilters:

    def test_all_is_exclusive(self):
        assert toggle_content_filters([FILES, THREADS], ALL) == [ALL]
        assert toggle_content_filters([FILES], ALL) == [ALL]

    def test_switches_from_all_to_concrete(self):
        assert toggle_content_filters([ALL], FILES) == [FILES]

    def test_multi_select_and_fallback(self):
        """Emptying the selection falls back to ALL."""
        current = [ALL]
        current = toggle_content_filters(current, FILES)
        current = toggle_content_filters(current, THREADS)
        assert current == [FILES, THREADS]

        current = toggle_content_filters(current, FILES)
        assert current == [THREADS]

        current = toggle_content_filters(current, THREADS)
        assert current == [ALL]

    def test_input_is_not_mutated(self):
        current = [FILES]
        toggle_content_filters(current, THREADS)
        assert current == [FILES]


@pytest.mark.parametrize(
    "state,selected",
    list(itertools.product([[ALL]] + [[f] for f in CONCRETE], list(ContentFilter)))
)
def test_transition_table_keeps_invariant(state, selected):
    """Every transition yields [ALL] or a non-empty set of concrete filters."""
    next_state = toggle_content_filters(state, selected)

    assert next_state
    assert len(next_state) == len(set(next_state))
    if ALL in next_state:
        assert next_state == [ALL]

    if selected is ALL:
        assert next_state == [ALL]
    elif state == [selected]:
        assert next_state == [ALL]
    elif state == [ALL]:
        assert next_state == [selected]
    else:
        assert next_state == state + [selected]


class TestEnabledCategories:

    def test_all_enables_everything(self):
        assert enabled_categories([ALL]) == set(SourceKind)
        assert enabled_categories([]) == set(SourceKind)

    def test_subset(self):
        assert enabled_categories([FILES, ContentFilter.SKILLS]) == {
            SourceKind.FILES, SourceKind.SKILLS
        }


def test_parse_content_filters():
    assert parse_content_filters([]) == [ALL]
    assert parse_content_filters(["Files", "bogus", "files", "threads"]) == [FILES, THREADS]
    assert parse_content_filters(["files", "all"]) == [ALL]
