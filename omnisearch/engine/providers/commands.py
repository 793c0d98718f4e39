"""Custom command provider."""

from typing import Iterable, List

from ..models import CommandOption, ResultKind, SearchResult, SourceKind
from .base import band_score, normalize_query

PREFIX_SCORE = 45
BASE_SCORE = 230


def search_commands(query: str, commands: Iterable[CommandOption]) -> List[SearchResult]:
    """Match against "<name> <description> <argument hint>"."""
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    results = []
    for command in commands:
        name = (command.name or "").strip()
        if not name:
            continue
        description = (command.description or "").strip()
        argument_hint = (command.argument_hint or "").strip()
        search_text = f"{name} {description} {argument_hint}".lower()
        index = search_text.find(normalized_query)
        if index < 0:
            continue
        results.append(SearchResult(
            id=f"command:{name}",
            kind=ResultKind.COMMAND,
            title=f"/{name}",
            subtitle=description or argument_hint or "Command",
            score=band_score(index, PREFIX_SCORE, BASE_SCORE),
            command_name=name,
            source_kind=SourceKind.COMMANDS,
            location_label=command.path or name,
        ))
    return results
