"""File path provider."""

from typing import Iterable, List

from ..models import ResultKind, SearchResult, SourceKind
from .base import band_score, normalize_query

PREFIX_SCORE = 20
BASE_SCORE = 200


def search_files(query: str, files: Iterable[str], workspace_id: str) -> List[SearchResult]:
    """Match the query against relative file paths of one workspace."""
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    results = []
    for path in files:
        index = path.lower().find(normalized_query)
        if index < 0:
            continue
        results.append(SearchResult(
            id=f"file:{workspace_id}:{path}",
            kind=ResultKind.FILE,
            title=path,
            subtitle="File",
            score=band_score(index, PREFIX_SCORE, BASE_SCORE),
            workspace_id=workspace_id,
            file_path=path,
            source_kind=SourceKind.FILES,
            location_label=path,
        ))
    return results
