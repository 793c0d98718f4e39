"""Conversation message provider."""

from typing import Dict, List, Sequence

from ..message_index import build_message_index, make_message_snippet
from ..models import ConversationItem, ResultKind, SearchResult, SourceKind, ThreadSummary
from .base import band_score, normalize_query

PREFIX_SCORE = 40
BASE_SCORE = 260


def search_messages(
    query: str,
    workspace_id: str,
    threads: Sequence[ThreadSummary],
    thread_items_by_thread: Dict[str, Sequence[ConversationItem]]
) -> List[SearchResult]:
    """
    Search message text within one workspace's threads.

    Items belonging to threads outside ``threads`` are never visited, so
    another workspace's conversations cannot leak into the results.

    Args:
        query: Raw query text
        workspace_id: Workspace the threads belong to
        threads: Thread summaries of that workspace
        thread_items_by_thread: Conversation items keyed by thread id

    Returns:
        One result per matching message, in thread then item order
    """
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    thread_name_by_id = {thread.id: thread.name for thread in threads}
    thread_updated_at_by_id = {thread.id: thread.updated_at for thread in threads}
    indexed_messages = build_message_index(
        [thread.id for thread in threads],
        thread_items_by_thread
    )

    results = []
    for message in indexed_messages:
        index = message.text.lower().find(normalized_query)
        if index < 0:
            continue
        results.append(SearchResult(
            id=f"message:{workspace_id}:{message.thread_id}:{message.message_id}",
            kind=ResultKind.MESSAGE,
            title=thread_name_by_id.get(message.thread_id) or "Thread",
            subtitle=make_message_snippet(message.text, normalized_query),
            score=band_score(index, PREFIX_SCORE, BASE_SCORE),
            workspace_id=workspace_id,
            thread_id=message.thread_id,
            message_id=message.message_id,
            source_kind=SourceKind.MESSAGES,
            location_label=f"{message.thread_id} / {message.message_id}",
            updated_at=thread_updated_at_by_id.get(message.thread_id) or 0,
        ))
    return results
