"""
Application errors for clean API error handling.

Services raise these; the API layer turns each into a JSON body {"error": message}
with status 500. The message is what the caller sees, so it never carries
upstream response text.
"""

import httpx


class RelayError(Exception):
    """Base for errors the relay reports to the caller."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(RelayError):
    """Raised when a required credential is missing. Checked before any outbound call."""


class UpstreamError(RelayError):
    """Raised when an upstream call fails, times out, or returns an unexpected shape."""


class NotFoundError(RelayError):
    """Raised when a search yields no results after the keyword fallback."""


def describe_upstream_error(exc: Exception) -> str:
    """Short description of an upstream failure for server-side logs only."""
    if isinstance(exc, httpx.HTTPStatusError):
        return f"status={exc.response.status_code} body={exc.response.text[:200]!r}"
    if isinstance(exc, httpx.TimeoutException):
        return f"timeout: {exc!r}"
    return repr(exc)
