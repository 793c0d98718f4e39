"""Input history provider."""

from typing import Iterable, List

from ..models import HistoryEntry, ResultKind, SearchResult, SourceKind
from .base import band_score, normalize_query

PREFIX_SCORE = 30
BASE_SCORE = 220
MAX_IMPORTANCE_DISCOUNT = 20


def search_history(query: str, history_items: Iterable[HistoryEntry]) -> List[SearchResult]:
    """Match previously submitted inputs; important entries get a discount."""
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    results = []
    for item in history_items:
        text = (item.text or "").strip()
        if not text:
            continue
        index = text.lower().find(normalized_query)
        if index < 0:
            continue
        discount = int(min(item.importance or 0, MAX_IMPORTANCE_DISCOUNT))
        results.append(SearchResult(
            id=f"history:{text}",
            kind=ResultKind.HISTORY,
            title=text,
            subtitle="Input History",
            score=band_score(index, PREFIX_SCORE, BASE_SCORE) - discount,
            history_text=text,
            source_kind=SourceKind.HISTORY,
            location_label="input-history",
        ))
    return results
