"""
Exa client: neural/keyword web search and batched content fetch.

The API key travels in the x-api-key header. Like the Gemini client, errors
propagate as httpx.HTTPError / ValueError for the caller to map.
"""

import logging
from typing import Any

import httpx

from app.core.config import CONTENT_MAX_CHARACTERS, EXA_USER_AGENT, Settings

logger = logging.getLogger(__name__)


def result_list(body: Any) -> list[Any] | None:
    """The `results` array of an Exa body, or None when absent."""
    if not isinstance(body, dict):
        return None
    results = body.get("results")
    return results if isinstance(results, list) else None


def result_count(body: Any) -> int:
    """Number of results; a missing or null `results` counts as zero."""
    return len(result_list(body) or [])


class ExaClient:
    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self.settings = settings
        self.http = http

    def _headers(self, user_agent: bool = False) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "x-api-key": self.settings.exa_api_key}
        if user_agent:
            headers["User-Agent"] = EXA_USER_AGENT
        return headers

    async def _post(self, path: str, payload: dict[str, Any], user_agent: bool = False) -> Any:
        response = await self.http.post(
            f"{self.settings.exa_base_url}{path}",
            json=payload,
            headers=self._headers(user_agent),
            timeout=self.settings.request_timeout,
        )
        response.raise_for_status()
        return response.json()

    async def search(
        self,
        query: str,
        num_results: int,
        search_type: str = "neural",
        use_autoprompt: bool = False,
        user_agent: bool = False,
    ) -> Any:
        """POST /search. search_type is "neural" or "keyword"."""
        payload: dict[str, Any] = {"query": query, "numResults": num_results, "type": search_type}
        if use_autoprompt:
            payload["useAutoprompt"] = True
        logger.info("[exa:search] IN  type=%s num_results=%d query=%r", search_type, num_results, query)
        data = await self._post("/search", payload, user_agent=user_agent)
        logger.info("[exa:search] OUT type=%s results=%d", search_type, result_count(data))
        return data

    async def contents(self, ids: list[str], max_characters: int = CONTENT_MAX_CHARACTERS) -> Any:
        """POST /contents for the given result ids, text only (HTML stripped)."""
        payload = {
            "ids": list(ids),
            "text": {"maxCharacters": max_characters, "includeHtmlTags": False},
        }
        logger.info("[exa:contents] IN  ids=%d max_characters=%d", len(payload["ids"]), max_characters)
        data = await self._post("/contents", payload)
        logger.info("[exa:contents] OUT results=%d", result_count(data))
        return data
