"""Schemas for the search endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    """Request body for POST /api/search. The response is Exa's body, passed through."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"skill": "Docker", "searchType": "interview"}]},
    )

    skill: str = Field(..., description="Skill to find resources for.")
    search_type: Any = Field(
        "tutorial",
        alias="searchType",
        description="One of project, insight, interview, tutorial. Anything else, including non-strings, is treated as tutorial.",
    )
