"""
Explain pipeline: Discover -> Fetch -> Synthesize.

Each stage takes the previous stage's output and either returns its own output
or raises a RelayError naming the stage that failed. The first failure ends the
pipeline; nothing after it runs.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import CONTENT_MAX_CHARACTERS, CONTENT_SEPARATOR, EXPLAIN_NUM_RESULTS
from app.core.errors import NotFoundError, UpstreamError, describe_upstream_error
from app.services.exa_client import ExaClient, result_list
from app.services.fallback import EmptyResultFallback
from app.services.gemini_client import GeminiClient, first_candidate_text
from app.services.search_queries import build_explain_query

logger = logging.getLogger(__name__)

DISCOVER_FAILED = "Failed to search for explanations."
NO_RESULTS = "No search results found."
FETCH_FAILED = "Failed to get content for explanations."
SYNTHESIZE_FAILED = "Failed to synthesize explanation."

SYNTHESIS_INSTRUCTION = (
    "You are a helpful teaching assistant. Based *only* on the provided text, synthesize a single, "
    'clear, one-paragraph explanation of "what is {skill}" suitable for a beginner. Do not use any '
    'knowledge outside of the text. Do not start with "Based on the text...". Just provide the explanation.'
)


@dataclass
class Discovered:
    """Search results from the discover stage, in upstream order."""

    results: list[dict[str, Any]]
    used_fallback: bool = False

    @property
    def ids(self) -> list[Any]:
        return [r.get("id") for r in self.results]


@dataclass
class Fetched:
    texts: list[str]

    @property
    def combined(self) -> str:
        return combine_texts(self.texts)


def combine_texts(texts: list[str]) -> str:
    """Join article texts with the separator, preserving order."""
    return CONTENT_SEPARATOR.join(texts)


def _record_text(record: dict[str, Any]) -> str:
    text = record.get("text")
    return text if isinstance(text, str) else ""


def order_texts(ids: list[Any], records: list[Any]) -> list[str]:
    """
    Texts of the content records in discover order, matched by id.
    Records whose id was not discovered (or repeats one already placed) keep
    their returned order after the matched ones. Non-dict records are skipped.
    """
    wanted = {rid for rid in ids if isinstance(rid, str)}
    by_id: dict[str, str] = {}
    extra: list[str] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        rid = record.get("id")
        if isinstance(rid, str) and rid in wanted and rid not in by_id:
            by_id[rid] = _record_text(record)
        else:
            extra.append(_record_text(record))
    ordered = [by_id[rid] for rid in ids if isinstance(rid, str) and rid in by_id]
    return ordered + extra


def synthesis_instruction(skill: str) -> str:
    return SYNTHESIS_INSTRUCTION.format(skill=skill)


async def discover(exa: ExaClient, skill: str) -> Discovered:
    """Neural search for beginner explanations, keyword search once if that comes back empty."""
    query = build_explain_query(skill)
    logger.info("[explain:discover] IN  skill=%r query=%r", skill, query)
    policy = EmptyResultFallback(label="explain")
    try:
        outcome = await policy.run(
            lambda: exa.search(query, EXPLAIN_NUM_RESULTS, "neural"),
            lambda: exa.search(query, EXPLAIN_NUM_RESULTS, "keyword"),
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[explain:discover] search failed: %s", describe_upstream_error(e))
        raise UpstreamError(DISCOVER_FAILED) from e
    raw = result_list(outcome.body) or []
    if not raw:
        logger.info("[explain:discover] OUT no results for skill=%r", skill)
        raise NotFoundError(NO_RESULTS)
    results = [r for r in raw if isinstance(r, dict)]
    if not results:
        logger.warning("[explain:discover] results had no usable records: %r", str(raw)[:200])
        raise UpstreamError(DISCOVER_FAILED)
    logger.info("[explain:discover] OUT results=%d used_fallback=%s", len(results), outcome.used_fallback)
    return Discovered(results=results, used_fallback=outcome.used_fallback)


async def fetch(exa: ExaClient, discovered: Discovered) -> Fetched:
    """One batched contents call for every discovered id."""
    logger.info("[explain:fetch] IN  ids=%d", len(discovered.results))
    try:
        body = await exa.contents(discovered.ids, max_characters=CONTENT_MAX_CHARACTERS)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[explain:fetch] contents failed: %s", describe_upstream_error(e))
        raise UpstreamError(FETCH_FAILED) from e
    records = result_list(body)
    if records is None:
        logger.warning("[explain:fetch] contents response had no results")
        raise UpstreamError(FETCH_FAILED)
    texts = order_texts(discovered.ids, records)
    logger.info("[explain:fetch] OUT records=%d chars=%d", len(texts), sum(len(t) for t in texts))
    return Fetched(texts=texts)


async def synthesize(gemini: GeminiClient, skill: str, fetched: Fetched) -> str:
    """Ask the model for a one-paragraph beginner explanation grounded only in the fetched text."""
    combined = fetched.combined
    logger.info("[explain:synthesize] IN  combined_len=%d", len(combined))
    try:
        body = await gemini.generate(combined, synthesis_instruction(skill))
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[explain:synthesize] generate failed: %s", describe_upstream_error(e))
        raise UpstreamError(SYNTHESIZE_FAILED) from e
    explanation = first_candidate_text(body)
    if explanation is None:
        logger.warning("[explain:synthesize] unexpected response shape: %r", str(body)[:200])
        raise UpstreamError(SYNTHESIZE_FAILED)
    logger.info("[explain:synthesize] OUT explanation_len=%d", len(explanation))
    return explanation


async def run_explain(exa: ExaClient, gemini: GeminiClient, skill: str) -> str:
    discovered = await discover(exa, skill)
    fetched = await fetch(exa, discovered)
    return await synthesize(gemini, skill, fetched)
