"""
Gemini client: generateContent calls against the Generative Language API.

The API key travels as the `key` query parameter. Errors are left to the caller
(httpx.HTTPError for transport/status problems, ValueError for a non-JSON body)
so each operation can report its own message.
"""

import logging
from typing import Any

import httpx

from app.core.config import Settings

logger = logging.getLogger(__name__)


def build_generate_payload(
    prompt: str,
    system_instruction: str,
    response_mime_type: str | None = None,
    temperature: float | None = None,
) -> dict[str, Any]:
    """Build the generateContent body. generationConfig is only sent when something is set."""
    payload: dict[str, Any] = {
        "contents": [{"parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_instruction}]},
    }
    generation_config: dict[str, Any] = {}
    if response_mime_type is not None:
        generation_config["responseMimeType"] = response_mime_type
    if temperature is not None:
        generation_config["temperature"] = temperature
    if generation_config:
        payload["generationConfig"] = generation_config
    return payload


def first_candidate_text(body: Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None if the body is not shaped that way."""
    if not isinstance(body, dict):
        return None
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


class GeminiClient:
    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self.settings = settings
        self.http = http

    @property
    def url(self) -> str:
        return f"{self.settings.gemini_base_url}/models/{self.settings.gemini_model}:generateContent"

    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        response_mime_type: str | None = None,
        temperature: float | None = None,
    ) -> Any:
        """POST generateContent and return the decoded JSON body."""
        payload = build_generate_payload(prompt, system_instruction, response_mime_type, temperature)
        logger.info(
            "[gemini:generate] IN  model=%s prompt_len=%d system_len=%d",
            self.settings.gemini_model, len(prompt), len(system_instruction),
        )
        response = await self.http.post(
            self.url,
            params={"key": self.settings.gemini_api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.settings.request_timeout,
        )
        response.raise_for_status()
        data = response.json()
        logger.info("[gemini:generate] OUT status=%d", response.status_code)
        return data
