"""
EmptyResultFallback: the one retry policy the relay has.

The fallback runs only when the primary call succeeds with zero results. An
exception from the primary call propagates and the fallback is never tried.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from app.services.exa_client import result_count

logger = logging.getLogger(__name__)


@dataclass
class FallbackOutcome:
    body: Any
    used_fallback: bool


class EmptyResultFallback:
    """Await primary(); if it returned no results, await fallback() once and return that."""

    def __init__(self, count: Callable[[Any], int] = result_count, label: str = "search") -> None:
        self.count = count
        self.label = label

    async def run(
        self,
        primary: Callable[[], Awaitable[Any]],
        fallback: Callable[[], Awaitable[Any]],
    ) -> FallbackOutcome:
        body = await primary()
        found = self.count(body)
        if found > 0:
            logger.info("[fallback:%s] primary returned %d results", self.label, found)
            return FallbackOutcome(body=body, used_fallback=False)
        logger.info("[fallback:%s] primary returned no results; running fallback", self.label)
        body = await fallback()
        logger.info("[fallback:%s] fallback returned %d results", self.label, self.count(body))
        return FallbackOutcome(body=body, used_fallback=True)
