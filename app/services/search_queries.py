"""Query phrasing per search type: one neural-style query and one keyword query."""

from enum import Enum
from typing import Any


class SearchType(str, Enum):
    PROJECT = "project"
    INSIGHT = "insight"
    INTERVIEW = "interview"
    TUTORIAL = "tutorial"


# search type -> (neural template, keyword template)
QUERY_TEMPLATES: dict[SearchType, tuple[str, str]] = {
    SearchType.PROJECT: (
        "practical project ideas for beginners using {skill}",
        "{skill} project ideas",
    ),
    SearchType.INSIGHT: (
        "expert insights and analysis on {skill}",
        "{skill} expert blog post",
    ),
    SearchType.INTERVIEW: (
        "common technical interview questions for {skill}",
        "{skill} interview questions",
    ),
    SearchType.TUTORIAL: (
        "best guides and tutorials for learning {skill}",
        "learn {skill} tutorial",
    ),
}

EXPLAIN_QUERY_TEMPLATE = "what is {skill} simple explanation for beginners"


def resolve_search_type(value: Any) -> SearchType:
    """Map a raw searchType to a SearchType; missing, unknown or non-string values mean tutorial."""
    if isinstance(value, SearchType):
        return value
    if not isinstance(value, str):
        return SearchType.TUTORIAL
    try:
        return SearchType(value)
    except ValueError:
        return SearchType.TUTORIAL


def build_search_queries(skill: str, search_type: Any) -> tuple[str, str]:
    """Return (neural_query, keyword_query) for the skill."""
    neural, keyword = QUERY_TEMPLATES[resolve_search_type(search_type)]
    return neural.format(skill=skill), keyword.format(skill=skill)


def build_explain_query(skill: str) -> str:
    return EXPLAIN_QUERY_TEMPLATE.format(skill=skill)
