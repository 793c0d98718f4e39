"""Result ordering: provider score, recency boost, then deterministic tie-breaks."""

import math
import time
from functools import cmp_to_key
from typing import Dict, List, Mapping, Optional, Sequence

from .models import SearchResult

RECENT_OPEN_BOOST_MS = 7 * 24 * 60 * 60 * 1000
MAX_RECENCY_BONUS = 20

RecencyMap = Dict[str, int]


def now_ms() -> int:
    return int(time.time() * 1000)


def recency_bonus(
    result_id: str,
    recency_map: Mapping[str, float],
    now: int,
    window_ms: int = RECENT_OPEN_BOOST_MS,
    max_bonus: int = MAX_RECENCY_BONUS
) -> int:
    """
    Score discount for a result opened recently.

    Decays linearly from ``max_bonus`` right after opening to 0 once
    ``window_ms`` has elapsed. A timestamp in the future (clock skew)
    gets the full bonus.
    """
    opened_at = recency_map.get(result_id)
    if not opened_at:
        return 0

    elapsed = now - opened_at
    if elapsed <= 0:
        return max_bonus
    if elapsed >= window_ms:
        return 0

    ratio = 1 - elapsed / window_ms
    # Half-up rounding, not banker's rounding
    return math.floor(ratio * max_bonus + 0.5)


def _title_key(title: str):
    # Case-insensitive first, raw title breaks remaining ties
    return (title.casefold(), title)


def compare_results(
    a: SearchResult,
    b: SearchResult,
    recency_map: Mapping[str, float],
    now: Optional[int] = None
) -> int:
    """
    Three-way comparison of two results; negative means ``a`` sorts first.

    Order: effective score (score minus recency bonus) ascending, then
    ``updated_at`` descending, then title ascending.
    """
    if now is None:
        now = now_ms()

    score_a = a.score - recency_bonus(a.id, recency_map, now)
    score_b = b.score - recency_bonus(b.id, recency_map, now)
    return _compare_effective(a, score_a, b, score_b)


def _compare_effective(a: SearchResult, score_a: int, b: SearchResult, score_b: int) -> int:
    if score_a != score_b:
        return -1 if score_a < score_b else 1

    updated_a = a.updated_at or 0
    updated_b = b.updated_at or 0
    if updated_a != updated_b:
        return -1 if updated_a > updated_b else 1

    key_a = _title_key(a.title)
    key_b = _title_key(b.title)
    if key_a == key_b:
        return 0
    return -1 if key_a < key_b else 1


def sort_results(
    results: Sequence[SearchResult],
    recency_map: Mapping[str, float],
    now: Optional[int] = None,
    window_ms: int = RECENT_OPEN_BOOST_MS,
    max_bonus: int = MAX_RECENCY_BONUS
) -> List[SearchResult]:
    """
    Sort a batch of results with one captured "now".

    Each result's effective score is computed once up front, so the whole
    batch is ranked against the same instant.
    """
    if now is None:
        now = now_ms()

    effective = {
        id(result): result.score - recency_bonus(
            result.id, recency_map, now, window_ms, max_bonus
        )
        for result in results
    }

    def compare(a: SearchResult, b: SearchResult) -> int:
        return _compare_effective(a, effective[id(a)], b, effective[id(b)])

    return sorted(results, key=cmp_to_key(compare))
