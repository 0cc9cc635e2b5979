"""
API handlers: build the orchestrator for a request and map relay errors to HTTP.

Responsibility: Bridge HTTP types and services. Dependency wiring and
exception-to-HTTP mapping live here so services stay free of FastAPI types.
"""

import logging

import httpx
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.errors import RelayError
from app.services.orchestrator import RequestOrchestrator

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error."


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client created in the app lifespan."""
    return request.app.state.http_client


def get_orchestrator(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> RequestOrchestrator:
    return RequestOrchestrator.from_http(settings, http)


async def handle_relay_error(request: Request, exc: RelayError) -> JSONResponse:
    """Every relay failure becomes {"error": message}; upstream detail was already logged."""
    logger.info("[api:error] %s %s -> %s %r", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 500 {"error": ...} shape as every other failure."""
    fields = sorted({".".join(str(p) for p in err.get("loc", ())[1:]) or "body" for err in exc.errors()})
    logger.info("[api:validation] %s %s invalid fields=%s", request.method, request.url.path, fields)
    return JSONResponse(status_code=500, content={"error": f"Invalid request body: {', '.join(fields)}"})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort so a bug never reaches the caller as a plain-text 500."""
    logger.error("[api:unhandled] %s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})
