"""Schemas for the explain endpoint and the shared error body."""

from pydantic import BaseModel, Field


class ExplainRequest(BaseModel):
    """Request body for POST /api/explain."""

    skill: str = Field(..., description="Skill to explain for a beginner.")


class ExplainResponse(BaseModel):
    """Response for POST /api/explain. Intermediate search and content data is not returned."""

    explanation: str = Field(..., description="One-paragraph explanation synthesized from fetched articles.")


class ErrorResponse(BaseModel):
    """Body returned on every failure."""

    error: str = Field(..., description="User-facing error message.")
