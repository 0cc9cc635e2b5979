"""
RequestOrchestrator: the three relay operations (analyze, search, explain).

Responsibility: check credentials, call the upstream clients in sequence, and
turn upstream failures into RelayErrors. Called by the API; no FastAPI types here.
"""

import logging
from typing import Any

import httpx

from app.core.config import ANALYZE_MIME_TYPE, ANALYZE_TEMPERATURE, SEARCH_NUM_RESULTS, Settings
from app.core.errors import ConfigError, UpstreamError, describe_upstream_error
from app.services.exa_client import ExaClient
from app.services.explain_pipeline import run_explain
from app.services.fallback import EmptyResultFallback
from app.services.gemini_client import GeminiClient
from app.services.search_queries import SearchType, build_search_queries, resolve_search_type

logger = logging.getLogger(__name__)

GEMINI_KEY_MISSING = "Gemini API key is not configured."
EXA_KEY_MISSING = "Exa API key is not configured."
KEYS_MISSING = "API keys are not configured."
GEMINI_FAILED = "Failed to call Gemini API"
EXA_FAILED = "Failed to call Exa API"


class RequestOrchestrator:
    def __init__(self, settings: Settings, gemini: GeminiClient, exa: ExaClient) -> None:
        self.settings = settings
        self.gemini = gemini
        self.exa = exa

    @classmethod
    def from_http(cls, settings: Settings, http: httpx.AsyncClient) -> "RequestOrchestrator":
        return cls(settings, GeminiClient(settings, http), ExaClient(settings, http))

    async def analyze(self, jd_text: str, system_prompt: str) -> Any:
        """Relay a job description to Gemini as JSON-mode generation; return the body unmodified."""
        if not self.settings.gemini_configured:
            raise ConfigError(GEMINI_KEY_MISSING)
        logger.info("[orchestrator:analyze] IN  jd_len=%d", len(jd_text))
        try:
            return await self.gemini.generate(
                jd_text,
                system_prompt,
                response_mime_type=ANALYZE_MIME_TYPE,
                temperature=ANALYZE_TEMPERATURE,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[orchestrator:analyze] Gemini API error: %s", describe_upstream_error(e))
            raise UpstreamError(GEMINI_FAILED) from e

    async def search(self, skill: str, search_type: Any = SearchType.TUTORIAL) -> Any:
        """
        Neural search first; keyword search only if neural succeeded with zero results.
        Returns whichever raw Exa body ended the chain.
        """
        if not self.settings.exa_configured:
            raise ConfigError(EXA_KEY_MISSING)
        kind = resolve_search_type(search_type)
        neural_query, keyword_query = build_search_queries(skill, kind)
        logger.info("[orchestrator:search] IN  skill=%r type=%s neural_query=%r", skill, kind.value, neural_query)
        policy = EmptyResultFallback(label=f"search:{kind.value}")
        try:
            outcome = await policy.run(
                lambda: self.exa.search(
                    neural_query, SEARCH_NUM_RESULTS, "neural", use_autoprompt=True, user_agent=True
                ),
                lambda: self.exa.search(keyword_query, SEARCH_NUM_RESULTS, "keyword", user_agent=True),
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "[orchestrator:search] Exa API error for type=%s: %s", kind.value, describe_upstream_error(e)
            )
            raise UpstreamError(EXA_FAILED) from e
        logger.info("[orchestrator:search] OUT skill=%r used_fallback=%s", skill, outcome.used_fallback)
        return outcome.body

    async def explain(self, skill: str) -> str:
        """Search for beginner explanations, fetch their text, and summarize it into one paragraph."""
        if not (self.settings.gemini_configured and self.settings.exa_configured):
            raise ConfigError(KEYS_MISSING)
        logger.info("[orchestrator:explain] IN  skill=%r", skill)
        explanation = await run_explain(self.exa, self.gemini, skill)
        logger.info("[orchestrator:explain] OUT explanation_len=%d", len(explanation))
        return explanation
