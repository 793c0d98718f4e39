"""Content filter selection: exclusive "all" vs. multi-select categories."""

from enum import Enum
from typing import Iterable, List, Set

from .models import SourceKind


class ContentFilter(Enum):
    """User-selectable category restricting which providers run."""
    ALL = "all"
    FILES = "files"
    KANBAN = "kanban"
    THREADS = "threads"
    MESSAGES = "messages"
    HISTORY = "history"
    SKILLS = "skills"
    COMMANDS = "commands"


def toggle_content_filters(
    current: Iterable[ContentFilter],
    selected: ContentFilter
) -> List[ContentFilter]:
    """
    Apply one filter click to the current selection.

    Selecting ALL always resets to [ALL]. Selecting a concrete category
    drops ALL, then toggles the category in or out; removing the last
    concrete category falls back to [ALL].

    Args:
        current: Currently enabled filters
        selected: Filter the user just toggled

    Returns:
        Next filter selection, never empty
    """
    if selected is ContentFilter.ALL:
        return [ContentFilter.ALL]

    current = list(current)
    if ContentFilter.ALL in current:
        remaining = []
    else:
        remaining = [item for item in current if item is not ContentFilter.ALL]

    if selected in remaining:
        remaining = [item for item in remaining if item is not selected]
        return remaining if remaining else [ContentFilter.ALL]

    return remaining + [selected]


def enabled_categories(filters: Iterable[ContentFilter]) -> Set[SourceKind]:
    """Resolve a filter selection to the concrete source categories it enables."""
    filters = list(filters)
    if not filters or ContentFilter.ALL in filters:
        return set(SourceKind)
    return {SourceKind(item.value) for item in filters}


def parse_content_filters(values: Iterable[str]) -> List[ContentFilter]:
    """Parse filter names, ignoring unknown ones; defaults to [ALL]."""
    parsed: List[ContentFilter] = []
    for value in values:
        try:
            item = ContentFilter(value.strip().lower())
        except ValueError:
            continue
        if item not in parsed:
            parsed.append(item)

    if not parsed or ContentFilter.ALL in parsed:
        return [ContentFilter.ALL]
    return parsed
