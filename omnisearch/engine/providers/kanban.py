"""Kanban task provider."""

from typing import Iterable, List

from ..models import KanbanTask, ResultKind, SearchResult, SourceKind
from .base import band_score, normalize_query

TITLE_PREFIX_SCORE = 10
TITLE_BASE_SCORE = 100
DESCRIPTION_BASE_SCORE = 300


def search_kanban_tasks(query: str, tasks: Iterable[KanbanTask]) -> List[SearchResult]:
    """
    Match the query against task titles, then descriptions.

    Title hits always outrank description-only hits.
    """
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    results = []
    for task in tasks:
        title = (task.title or "").strip()
        description = (task.description or "").strip()
        title_index = title.lower().find(normalized_query)
        description_index = description.lower().find(normalized_query)
        if title_index < 0 and description_index < 0:
            continue

        if title_index >= 0:
            score = band_score(title_index, TITLE_PREFIX_SCORE, TITLE_BASE_SCORE)
        else:
            score = DESCRIPTION_BASE_SCORE + description_index

        results.append(SearchResult(
            id=f"kanban:{task.id}",
            kind=ResultKind.KANBAN,
            title=title or "(untitled task)",
            subtitle=description or "Kanban Task",
            score=score,
            workspace_id=task.workspace_id,
            panel_id=task.panel_id,
            task_id=task.id,
            source_kind=SourceKind.KANBAN,
            location_label=task.panel_id or task.id,
        ))
    return results
