"""Flatten per-thread conversation logs into a searchable message list."""

from typing import Dict, Iterable, List, Sequence

from .models import ConversationItem, IndexedMessage

SNIPPET_RADIUS = 36
SNIPPET_FALLBACK_LENGTH = 96


def build_message_index(
    thread_ids: Iterable[str],
    items_by_thread: Dict[str, Sequence[ConversationItem]]
) -> List[IndexedMessage]:
    """
    Collect plain message items for the given threads.

    Thread order and item order are preserved. Non-message items and
    messages whose text is blank are skipped; text is trimmed.
    """
    indexed: List[IndexedMessage] = []
    for thread_id in thread_ids:
        for item in items_by_thread.get(thread_id) or ():
            if item.kind != "message":
                continue
            text = (item.text or "").strip()
            if not text:
                continue
            indexed.append(IndexedMessage(
                message_id=item.id,
                thread_id=thread_id,
                text=text
            ))
    return indexed


def make_message_snippet(text: str, query: str, radius: int = SNIPPET_RADIUS) -> str:
    """
    Cut a window of ``radius`` characters either side of the first query hit.

    Without a query or a hit, the first 96 characters are returned as-is.
    Truncated ends are marked with "...".
    """
    normalized_query = query.strip().lower()
    if not normalized_query:
        return text[:SNIPPET_FALLBACK_LENGTH]

    hit = text.lower().find(normalized_query)
    if hit < 0:
        return text[:SNIPPET_FALLBACK_LENGTH]

    start = max(0, hit - radius)
    end = min(len(text), hit + len(normalized_query) + radius)
    head = "..." if start > 0 else ""
    tail = "..." if end < len(text) else ""
    return f"{head}{text[start:end]}{tail}"
