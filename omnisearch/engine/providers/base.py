"""Shared matching helpers for providers."""


def normalize_query(query: str) -> str:
    """Trim and lower-case a raw query; an empty result means "no matches"."""
    return (query or "").strip().lower()


def band_score(index: int, prefix_score: int, base_score: int) -> int:
    """
    Score a match at character offset ``index``.

    A hit at offset 0 gets the provider's prefix band, anything later
    the base band plus the offset. Lower is better.
    """
    return prefix_score if index == 0 else base_score + index
