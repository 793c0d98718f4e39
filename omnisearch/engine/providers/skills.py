"""Skill catalog provider."""

from typing import Iterable, List, Optional

from ..models import ResultKind, SearchResult, SkillOption, SourceKind
from .base import band_score, normalize_query

PREFIX_SCORE = 35
BASE_SCORE = 210


def search_skills(
    query: str,
    skills: Iterable[SkillOption],
    workspace_id: Optional[str] = None
) -> List[SearchResult]:
    """Match against "<name> <description>"; offsets count into that string."""
    normalized_query = normalize_query(query)
    if not normalized_query:
        return []

    results = []
    for skill in skills:
        name = (skill.name or "").strip()
        if not name:
            continue
        description = (skill.description or "").strip()
        index = f"{name} {description}".lower().find(normalized_query)
        if index < 0:
            continue
        results.append(SearchResult(
            id=f"skill:{workspace_id or 'active'}:{name}",
            kind=ResultKind.SKILL,
            title=f"/{name}",
            subtitle=description or "Skill",
            score=band_score(index, PREFIX_SCORE, BASE_SCORE),
            workspace_id=workspace_id or None,
            skill_name=name,
            source_kind=SourceKind.SKILLS,
            location_label=skill.path or name,
        ))
    return results
