"""
API route aggregator: register endpoints; no logic — only delegate to the orchestrator.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.api.handlers import get_orchestrator
from app.core.config import Settings, get_settings
from app.schemas.analyze import AnalyzeRequest
from app.schemas.explain import ErrorResponse, ExplainRequest, ExplainResponse
from app.schemas.search import SearchRequest
from app.services.orchestrator import RequestOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {500: {"model": ErrorResponse}}


# --- System ---

@router.get("/health", tags=["system"])
def health(settings: Settings = Depends(get_settings)) -> dict:
    return {
        "ok": True,
        "gemini_configured": settings.gemini_configured,
        "exa_configured": settings.exa_configured,
    }


# --- Relay ---

@router.post(
    "/api/analyze",
    tags=["relay"],
    summary="Analyze a job description with Gemini",
    description="Relays jdText and systemPrompt to Gemini (JSON output, temperature 0.2) and returns Gemini's body unmodified.",
    responses=_ERROR_RESPONSES,
)
async def post_analyze(
    body: AnalyzeRequest,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> Any:
    logger.info("[api:post_analyze] IN  jd_len=%d", len(body.jd_text))
    return await orchestrator.analyze(body.jd_text, body.system_prompt)


@router.post(
    "/api/search",
    tags=["relay"],
    summary="Search learning resources for a skill",
    description="Neural Exa search first; keyword search if that returns no results. Returns Exa's body.",
    responses=_ERROR_RESPONSES,
)
async def post_search(
    body: SearchRequest,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> Any:
    logger.info("[api:post_search] IN  skill=%r search_type=%r", body.skill, body.search_type)
    return await orchestrator.search(body.skill, body.search_type)


@router.post(
    "/api/explain",
    response_model=ExplainResponse,
    tags=["relay"],
    summary="Explain a skill for a beginner",
    description="Searches for explanations, fetches their text, and has Gemini write one paragraph from it.",
    responses=_ERROR_RESPONSES,
)
async def post_explain(
    body: ExplainRequest,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> ExplainResponse:
    logger.info("[api:post_explain] IN  skill=%r", body.skill)
    explanation = await orchestrator.explain(body.skill)
    return ExplainResponse(explanation=explanation)
