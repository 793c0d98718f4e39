"""Synthetic corpora for latency baselines and benchmarks."""

from typing import Dict, List, Optional

from .config import PerformanceConfig
from .filters import ContentFilter
from .models import ConversationItem, ThreadSummary, WorkspaceSource
from .search import SearchParams

# 8 workspaces x 1500 files x 180 threads x 16 messages, under 1.6s
SEARCH_PERF_BASELINE_GLOBAL = PerformanceConfig()

BASELINE_QUERY = "alpha"


def build_synthetic_corpus(
    baseline: Optional[PerformanceConfig] = None,
    query: str = BASELINE_QUERY
) -> SearchParams:
    """
    Build a global search over a synthetic corpus.

    Roughly 1 in 15 files, 1 in 8 thread names and 1 in 6 messages
    contain ``query``; everything else is filler.
    """
    baseline = baseline or SEARCH_PERF_BASELINE_GLOBAL
    workspace_sources: List[WorkspaceSource] = []
    thread_items_by_thread: Dict[str, List[ConversationItem]] = {}

    for workspace_index in range(baseline.workspace_count):
        workspace_id = f"w-{workspace_index}"
        files = [
            f"src/{query}-{workspace_index}-{file_index}.ts"
            if file_index % 15 == 0
            else f"src/feature-{workspace_index}-{file_index}.ts"
            for file_index in range(baseline.files_per_workspace)
        ]
        threads = [
            ThreadSummary(
                id=f"{workspace_id}-t-{thread_index}",
                name=(
                    f"{query}-thread-{workspace_id}-{thread_index}"
                    if thread_index % 8 == 0
                    else f"thread-{workspace_id}-{thread_index}"
                ),
                updated_at=1_700_000_000 + thread_index,
            )
            for thread_index in range(baseline.threads_per_workspace)
        ]
        for thread in threads:
            thread_items_by_thread[thread.id] = [
                ConversationItem(
                    id=f"{thread.id}-m-{msg_index}",
                    kind="message",
                    role="assistant",
                    text=(
                        f"{query} message {msg_index} in {thread.id}"
                        if msg_index % 6 == 0
                        else f"regular message {msg_index} in {thread.id}"
                    ),
                )
                for msg_index in range(baseline.messages_per_thread)
            ]
        workspace_sources.append(WorkspaceSource(
            workspace_id=workspace_id,
            workspace_name=f"Workspace {workspace_index}",
            files=files,
            threads=threads,
        ))

    return SearchParams(
        query=query,
        content_filters=[ContentFilter.ALL],
        workspace_sources=workspace_sources,
        thread_items_by_thread=thread_items_by_thread,
        active_workspace_id="w-0",
    )
