"""
Unit tests for EmptyResultFallback in isolation (no HTTP).
"""

import asyncio

import pytest

from app.services.fallback import EmptyResultFallback


class Counter:
    def __init__(self, body=None, exc: Exception | None = None) -> None:
        self.body = body
        self.exc = exc
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.exc is not None:
            raise self.exc
        return self.body


def test_primary_with_results_skips_fallback() -> None:
    primary = Counter({"results": [{"id": "a"}]})
    fallback = Counter({"results": [{"id": "b"}]})
    outcome = asyncio.run(EmptyResultFallback().run(primary, fallback))
    assert outcome.body == {"results": [{"id": "a"}]}
    assert outcome.used_fallback is False
    assert (primary.calls, fallback.calls) == (1, 0)


@pytest.mark.parametrize("empty", [{"results": []}, {}, {"results": None}, None])
def test_empty_primary_runs_fallback_once(empty) -> None:
    primary = Counter(empty)
    fallback = Counter({"results": []})
    outcome = asyncio.run(EmptyResultFallback().run(primary, fallback))
    # Fallback result is returned even when it is empty too
    assert outcome.body == {"results": []}
    assert outcome.used_fallback is True
    assert (primary.calls, fallback.calls) == (1, 1)


def test_primary_error_propagates_without_fallback() -> None:
    primary = Counter(exc=RuntimeError("boom"))
    fallback = Counter({"results": [{"id": "b"}]})
    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(EmptyResultFallback().run(primary, fallback))
    assert fallback.calls == 0


def test_fallback_error_propagates() -> None:
    primary = Counter({"results": []})
    fallback = Counter(exc=RuntimeError("down"))
    with pytest.raises(RuntimeError, match="down"):
        asyncio.run(EmptyResultFallback().run(primary, fallback))


def test_custom_count() -> None:
    primary = Counter(["x"])
    fallback = Counter(["y"])
    outcome = asyncio.run(EmptyResultFallback(count=len).run(primary, fallback))
    assert outcome.body == ["x"]
    assert fallback.calls == 0


def test_count_is_taken_once_per_body() -> None:
    seen = []

    def count(body) -> int:
        seen.append(body)
        return len(body)

    primary = Counter(["x"])
    asyncio.run(EmptyResultFallback(count=count).run(primary, Counter(["y"])))
    assert seen == [["x"]]
