"""Unified search: fan a query out across providers and workspaces, then rank."""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from loguru import logger

from .config import SearchConfig
from .filters import ContentFilter, enabled_categories
from .metrics import LatencyTimer, SearchMetrics, report_search_metrics
from .models import (
    CommandOption,
    ConversationItem,
    GLOBAL_SOURCE_KINDS,
    HistoryEntry,
    KanbanTask,
    SearchResult,
    SkillOption,
    SourceKind,
    WORKSPACE_SOURCE_KINDS,
    WorkspaceSource,
)
from .providers import (
    search_commands,
    search_files,
    search_history,
    search_kanban_tasks,
    search_messages,
    search_skills,
    search_threads,
)
from .ranking import now_ms, sort_results

T = TypeVar("T")


class SearchScope(Enum):
    """Which workspaces a search covers."""
    ACTIVE_WORKSPACE = "active-workspace"
    GLOBAL = "global"


@dataclass
class SearchParams:
    """Everything one search call looks at; a snapshot, never mutated."""
    query: str
    content_filters: List[ContentFilter] = field(default_factory=lambda: [ContentFilter.ALL])
    workspace_sources: List[WorkspaceSource] = field(default_factory=list)
    kanban_tasks: List[KanbanTask] = field(default_factory=list)
    thread_items_by_thread: Dict[str, List[ConversationItem]] = field(default_factory=dict)
    history_items: List[HistoryEntry] = field(default_factory=list)
    skills: List[SkillOption] = field(default_factory=list)
    commands: List[CommandOption] = field(default_factory=list)
    active_workspace_id: Optional[str] = None
    recency_map: Mapping[str, float] = field(default_factory=dict)
    report_metrics: bool = False


def take_limited(items: Sequence[T], limit: int) -> List[T]:
    """First ``limit`` items in their original order."""
    if limit <= 0:
        return []
    return list(items[:limit])


def resolve_workspace_sources(
    scope: SearchScope,
    workspaces: Sequence[WorkspaceSource],
    active_workspace_id: Optional[str]
) -> List[WorkspaceSource]:
    """
    Pick the workspace snapshots a scope covers.

    Active scope yields only the active workspace (nothing if it is not
    among ``workspaces``); global scope yields all of them in order.
    """
    if scope is SearchScope.GLOBAL:
        return list(workspaces)
    return [ws for ws in workspaces if ws.workspace_id == active_workspace_id]


def compute_search_results(
    params: SearchParams,
    config: Optional[SearchConfig] = None,
    metrics: Optional[SearchMetrics] = None,
    now: Optional[int] = None
) -> List[SearchResult]:
    """
    Run one unified search over a data snapshot.

    Steps:
    1. Resolve the enabled source categories from the content filters
    2. Run per-workspace providers (files, kanban, threads, messages)
       for every workspace source
    3. Run workspace-independent providers (history, skills, commands) once
    4. Cap each provider call's output by emission order
    5. Rank everything against the recency map at a single "now" and
       truncate to the total limit

    Args:
        params: Query, filters and data snapshot
        config: Limits and ranking settings (defaults when omitted)
        metrics: Optional collector for per-provider latencies
        now: Epoch-ms reference time for the recency boost

    Returns:
        Ranked results, at most ``config.ranking.total_limit`` long
    """
    config = config or SearchConfig()
    start_time = time.perf_counter()

    if not params.query.strip():
        return []

    categories = enabled_categories(params.content_filters)
    limits = config.limits
    query = params.query
    collected: List[SearchResult] = []

    def run(
        source_kind: SourceKind,
        provider: Callable[[], List[SearchResult]],
        workspace_name: Optional[str] = None
    ) -> None:
        with LatencyTimer() as timer:
            raw = provider()
        if metrics is not None:
            metrics.record_provider(source_kind, timer.elapsed_ms, len(raw))
        kept = take_limited(raw, limits.limit_for(source_kind))
        if workspace_name:
            for result in kept:
                result.workspace_name = workspace_name
        collected.extend(kept)

    tasks_by_workspace: Dict[str, List[KanbanTask]] = defaultdict(list)
    if SourceKind.KANBAN in categories:
        for task in params.kanban_tasks:
            tasks_by_workspace[task.workspace_id].append(task)

    for source in params.workspace_sources:
        ws_id = source.workspace_id
        ws_name = source.workspace_name or None
        for source_kind in WORKSPACE_SOURCE_KINDS:
            if source_kind not in categories:
                continue
            if source_kind is SourceKind.FILES:
                run(source_kind, lambda: search_files(query, source.files, ws_id), ws_name)
            elif source_kind is SourceKind.KANBAN:
                run(source_kind, lambda: search_kanban_tasks(
                    query, tasks_by_workspace.get(ws_id, [])
                ), ws_name)
            elif source_kind is SourceKind.THREADS:
                run(source_kind, lambda: search_threads(query, source.threads, ws_id), ws_name)
            elif source_kind is SourceKind.MESSAGES:
                run(source_kind, lambda: search_messages(
                    query, ws_id, source.threads, params.thread_items_by_thread
                ), ws_name)

    # Skills are tagged with the active workspace when its snapshot is present
    active_name = next(
        (ws.workspace_name for ws in params.workspace_sources
         if ws.workspace_id == params.active_workspace_id),
        None
    )
    for source_kind in GLOBAL_SOURCE_KINDS:
        if source_kind not in categories:
            continue
        if source_kind is SourceKind.HISTORY:
            run(source_kind, lambda: search_history(query, params.history_items))
        elif source_kind is SourceKind.SKILLS:
            run(
                source_kind,
                lambda: search_skills(query, params.skills, params.active_workspace_id),
                active_name,
            )
        elif source_kind is SourceKind.COMMANDS:
            run(source_kind, lambda: search_commands(query, params.commands))

    ranked = sort_results(
        collected,
        params.recency_map,
        now=now if now is not None else now_ms(),
        window_ms=config.ranking.recency_window_ms,
        max_bonus=config.ranking.max_recency_bonus,
    )
    results = take_limited(ranked, config.ranking.total_limit)

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    if metrics is not None:
        metrics.record_search(elapsed_ms, len(results))
    if params.report_metrics:
        report_search_metrics(query, elapsed_ms, len(results))

    logger.debug(
        f"Search '{query}' matched {len(collected)} candidates, "
        f"returned {len(results)} in {elapsed_ms:.1f}ms"
    )
    return results
