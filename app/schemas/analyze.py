"""Schemas for the analyze endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """Request body for POST /api/analyze. Both fields are relayed to Gemini verbatim."""

    model_config = ConfigDict(populate_by_name=True)

    jd_text: str = Field(..., alias="jdText", description="Job description text; becomes the prompt.")
    system_prompt: str = Field(..., alias="systemPrompt", description="System instruction for the model.")
