# Run from project root: uvicorn app.main:app --port 3000

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.handlers import handle_relay_error, handle_unexpected_error, handle_validation_error
from app.api.routes import router
from app.core.config import get_settings
from app.core.errors import RelayError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        app.state.http_client = client
        logger.info("[main] relay ready gemini=%s exa=%s", settings.gemini_configured, settings.exa_configured)
        yield


app = FastAPI(title="Skill Roadmap Relay", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(RelayError, handle_relay_error)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(Exception, handle_unexpected_error)
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
