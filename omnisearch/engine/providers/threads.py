"""Thread name provider."""

from typing import Iterable, List

from ..models import ResultKind, SearchResult, SourceKind, ThreadSummary
from .base import band_score, normalize_query

PREFIX_SCORE = 15
BASE_SCORE = 160


def search_threads(
    query: str,
    threads: Iterable[ThreadSummary],
    workspace_id: str
) -> List[SearchResult]:
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    results = []
    for thread in threads:
        index = (thread.name or "").lower().find(normalized_query)
        if index < 0:
            continue
        results.append(SearchResult(
            id=f"thread:{workspace_id}:{thread.id}",
            kind=ResultKind.THREAD,
            title=thread.name,
            subtitle="Thread",
            score=band_score(index, PREFIX_SCORE, BASE_SCORE),
            workspace_id=workspace_id,
            thread_id=thread.id,
            source_kind=SourceKind.THREADS,
            location_label=thread.id,
            updated_at=thread.updated_at,
        ))
    return results
