"""Load a workspace data snapshot from JSON for offline searching."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from .filters import ContentFilter
from .models import (
    CommandOption,
    ConversationItem,
    HistoryEntry,
    KanbanTask,
    SkillOption,
    WorkspaceSource,
)
from .search import SearchParams, SearchScope, resolve_workspace_sources


@dataclass
class Snapshot:
    """All corpora a search can see, as exported by the host application."""
    workspaces: List[WorkspaceSource] = field(default_factory=list)
    active_workspace_id: Optional[str] = None
    kanban_tasks: List[KanbanTask] = field(default_factory=list)
    thread_items_by_thread: Dict[str, List[ConversationItem]] = field(default_factory=dict)
    history_items: List[HistoryEntry] = field(default_factory=list)
    skills: List[SkillOption] = field(default_factory=list)
    commands: List[CommandOption] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        """Parse a snapshot document; malformed entries are skipped."""
        active = data.get('activeWorkspaceId')
        items_by_thread = {}
        raw_items = data.get('threadItemsByThread')
        if isinstance(raw_items, dict):
            for thread_id, items in raw_items.items():
                if not isinstance(items, list):
                    continue
                items_by_thread[thread_id] = [
                    ConversationItem.from_dict(item) for item in items if isinstance(item, dict)
                ]

        return cls(
            workspaces=_parse_list(data.get('workspaces'), WorkspaceSource.from_dict),
            active_workspace_id=active if isinstance(active, str) else None,
            kanban_tasks=_parse_list(data.get('kanbanTasks'), KanbanTask.from_dict),
            thread_items_by_thread=items_by_thread,
            history_items=_parse_list(data.get('historyItems'), HistoryEntry.from_dict),
            skills=_parse_list(data.get('skills'), SkillOption.from_dict),
            commands=_parse_list(data.get('commands'), CommandOption.from_dict),
        )

    @classmethod
    def load(cls, path: Path) -> "Snapshot":
        logger.info(f"Loading snapshot from: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot must be a JSON object: {path}")
        return cls.from_dict(data)

    def to_params(
        self,
        query: str,
        scope: SearchScope = SearchScope.ACTIVE_WORKSPACE,
        content_filters: Optional[List[ContentFilter]] = None,
        recency_map: Optional[Dict[str, int]] = None,
        report_metrics: bool = False
    ) -> SearchParams:
        return SearchParams(
            query=query,
            content_filters=content_filters or [ContentFilter.ALL],
            workspace_sources=resolve_workspace_sources(
                scope, self.workspaces, self.active_workspace_id
            ),
            kanban_tasks=self.kanban_tasks,
            thread_items_by_thread=self.thread_items_by_thread,
            history_items=self.history_items,
            skills=self.skills,
            commands=self.commands,
            active_workspace_id=self.active_workspace_id,
            recency_map=recency_map or {},
            report_metrics=report_metrics,
        )


def _parse_list(value: Any, parse) -> list:
    if not isinstance(value, list):
        return []
    return [parse(item) for item in value if isinstance(item, dict)]
