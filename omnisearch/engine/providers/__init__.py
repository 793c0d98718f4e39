"""Per-source search providers."""

from .commands import search_commands
from .files import search_files
from .history import search_history
from .kanban import search_kanban_tasks
from .messages import search_messages
from .skills import search_skills
from .threads import search_threads

__all__ = [
    "search_commands",
    "search_files",
    "search_history",
    "search_kanban_tasks",
    "search_messages",
    "search_skills",
    "search_threads",
]
