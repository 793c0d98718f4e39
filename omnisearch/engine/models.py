"""Data models for the unified search engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional


class ResultKind(Enum):
    """Kind of entity a search result points at."""
    FILE = "file"
    KANBAN = "kanban"
    THREAD = "thread"
    MESSAGE = "message"
    HISTORY = "history"
    SKILL = "skill"
    COMMAND = "command"


class SourceKind(Enum):
    """Coarse source category used by content filtering."""
    FILES = "files"
    KANBAN = "kanban"
    THREADS = "threads"
    MESSAGES = "messages"
    HISTORY = "history"
    SKILLS = "skills"
    COMMANDS = "commands"


# Categories searched once per workspace source vs. once per call
WORKSPACE_SOURCE_KINDS = (
    SourceKind.FILES,
    SourceKind.KANBAN,
    SourceKind.THREADS,
    SourceKind.MESSAGES,
)
GLOBAL_SOURCE_KINDS = (
    SourceKind.HISTORY,
    SourceKind.SKILLS,
    SourceKind.COMMANDS,
)


@dataclass
class SearchResult:
    """One matched entity surfaced to the user. Lower score ranks first."""
    id: str
    kind: ResultKind
    title: str
    score: int
    source_kind: SourceKind
    subtitle: Optional[str] = None
    workspace_id: Optional[str] = None
    workspace_name: Optional[str] = None
    thread_id: Optional[str] = None
    message_id: Optional[str] = None
    panel_id: Optional[str] = None
    task_id: Optional[str] = None
    file_path: Optional[str] = None
    history_text: Optional[str] = None
    skill_name: Optional[str] = None
    command_name: Optional[str] = None
    location_label: Optional[str] = None
    updated_at: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'kind': self.kind.value,
            'title': self.title,
            'subtitle': self.subtitle,
            'score': self.score,
            'workspaceId': self.workspace_id,
            'workspaceName': self.workspace_name,
            'threadId': self.thread_id,
            'messageId': self.message_id,
            'panelId': self.panel_id,
            'taskId': self.task_id,
            'filePath': self.file_path,
            'historyText': self.history_text,
            'skillName': self.skill_name,
            'commandName': self.command_name,
            'sourceKind': self.source_kind.value,
            'locationLabel': self.location_label,
            'updatedAt': self.updated_at,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class IndexedMessage:
    """A single searchable message flattened out of a thread."""
    message_id: str
    thread_id: str
    text: str


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _as_number(value: Any, default: int = 0):
    # bool is an int subclass but never a meaningful timestamp or weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


@dataclass
class ThreadSummary:
    id: str
    name: str
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThreadSummary":
        return cls(
            id=_as_str(data.get('id')),
            name=_as_str(data.get('name')),
            updated_at=_as_number(data.get('updatedAt', data.get('updated_at'))),
        )


@dataclass
class ConversationItem:
    """
    One item of a thread's conversation log.

    Only items with kind "message" carry searchable text; reasoning, tool
    calls and the rest are kept so indexing can skip them.
    """
    id: str
    kind: str
    role: Optional[str] = None
    text: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationItem":
        role = data.get('role')
        return cls(
            id=_as_str(data.get('id')),
            kind=_as_str(data.get('kind')),
            role=role if isinstance(role, str) else None,
            text=_as_str(data.get('text')),
        )


@dataclass
class KanbanTask:
    id: str
    workspace_id: str
    title: str
    description: str = ""
    panel_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KanbanTask":
        panel_id = data.get('panelId', data.get('panel_id'))
        return cls(
            id=_as_str(data.get('id')),
            workspace_id=_as_str(data.get('workspaceId', data.get('workspace_id'))),
            title=_as_str(data.get('title')),
            description=_as_str(data.get('description')),
            panel_id=panel_id if isinstance(panel_id, str) else None,
        )


@dataclass
class SkillOption:
    name: str
    path: str = ""
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkillOption":
        description = data.get('description')
        return cls(
            name=_as_str(data.get('name')),
            path=_as_str(data.get('path')),
            description=description if isinstance(description, str) else None,
        )


@dataclass
class CommandOption:
    name: str
    path: str = ""
    description: Optional[str] = None
    argument_hint: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandOption":
        description = data.get('description')
        argument_hint = data.get('argumentHint', data.get('argument_hint'))
        return cls(
            name=_as_str(data.get('name')),
            path=_as_str(data.get('path')),
            description=description if isinstance(description, str) else None,
            argument_hint=argument_hint if isinstance(argument_hint, str) else None,
        )


@dataclass
class HistoryEntry:
    text: str
    importance: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            text=_as_str(data.get('text')),
            importance=_as_number(data.get('importance')),
        )


@dataclass
class WorkspaceSource:
    """Snapshot of one workspace's searchable files and threads."""
    workspace_id: str
    workspace_name: str = ""
    files: List[str] = field(default_factory=list)
    threads: List[ThreadSummary] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkspaceSource":
        files = data.get('files')
        threads = data.get('threads')
        return cls(
            workspace_id=_as_str(data.get('workspaceId', data.get('workspace_id', data.get('id')))),
            workspace_name=_as_str(data.get('workspaceName', data.get('workspace_name', data.get('name')))),
            files=[f for f in files if isinstance(f, str)] if isinstance(files, list) else [],
            threads=[
                ThreadSummary.from_dict(t) for t in threads if isinstance(t, dict)
            ] if isinstance(threads, list) else [],
        )
