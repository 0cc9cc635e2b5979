"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Credentials live on a Settings object built once at startup and
handed to the orchestrator; request code never reads the environment.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Gemini (generative text)
GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_DEFAULT_MODEL: str = "gemini-2.5-flash-preview-09-2025"
ANALYZE_TEMPERATURE: float = 0.2
ANALYZE_MIME_TYPE: str = "application/json"

# Exa (web search + contents)
EXA_BASE_URL: str = "https://api.exa.ai"
EXA_USER_AGENT: str = "JD-Roadmap-Demo/1.0.0"
SEARCH_NUM_RESULTS: int = 2
EXPLAIN_NUM_RESULTS: int = 3
# Per-article cap applied upstream, before the texts are joined
CONTENT_MAX_CHARACTERS: int = 2000
CONTENT_SEPARATOR: str = "\n\n---\n\n"

# API timeouts (seconds)
REQUEST_TIMEOUT: float = 30.0

DEFAULT_PORT: int = 3000


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the relay. Keys are empty strings when unset."""

    gemini_api_key: str = field(default="", repr=False)
    exa_api_key: str = field(default="", repr=False)
    gemini_model: str = GEMINI_DEFAULT_MODEL
    gemini_base_url: str = GEMINI_BASE_URL
    exa_base_url: str = EXA_BASE_URL
    request_timeout: float = REQUEST_TIMEOUT
    cors_origins: tuple[str, ...] = ("*",)
    port: int = DEFAULT_PORT

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def exa_configured(self) -> bool:
        return bool(self.exa_api_key)


def _split_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_settings() -> Settings:
    """Load .env + environment variables into a Settings instance."""
    load_dotenv()
    timeout_raw = os.getenv("REQUEST_TIMEOUT", "").strip()
    port_raw = os.getenv("PORT", "").strip()
    settings = Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        exa_api_key=os.getenv("EXA_API_KEY", "").strip(),
        gemini_model=os.getenv("GEMINI_MODEL", GEMINI_DEFAULT_MODEL).strip() or GEMINI_DEFAULT_MODEL,
        gemini_base_url=(os.getenv("GEMINI_BASE_URL", "").strip() or GEMINI_BASE_URL).rstrip("/"),
        exa_base_url=(os.getenv("EXA_BASE_URL", "").strip() or EXA_BASE_URL).rstrip("/"),
        request_timeout=float(timeout_raw) if timeout_raw else REQUEST_TIMEOUT,
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        port=int(port_raw) if port_raw else DEFAULT_PORT,
    )
    if not settings.gemini_configured:
        logger.warning("[config] GEMINI_API_KEY is not set; /api/analyze and /api/explain will fail")
    if not settings.exa_configured:
        logger.warning("[config] EXA_API_KEY is not set; /api/search and /api/explain will fail")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings singleton, built on first use."""
    return load_settings()
