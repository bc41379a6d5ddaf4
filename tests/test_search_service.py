from __future__ import annotations

import asyncio
import gc
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from chaekyoungae.application import SearchService
from chaekyoungae.core.errors import ExtractionError
from chaekyoungae.core.schema import CompositeResult, WorkRecord
from chaekyoungae.infrastructure import TTLCache

DUNE = '{"title": "듄", "tmdbQuery": "Dune", "order": ["소설 1권", "영화 파트 1"], "tips": ["지도를 참고하세요"]}'


class SlowGenerator:
    def __init__(self, text: str = DUNE) -> None:
        self.text = text
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        await asyncio.sleep(0.01)
        return self.text


class CountingPosters:
    def __init__(self) -> None:
        self.calls = 0

    async def find_poster_url(self, term: str) -> str | None:
        self.calls += 1
        return f"https://image.tmdb.org/t/p/w500/{term.lower()}.jpg"


def test_search_builds_and_caches_composite_result():
    cache: TTLCache[CompositeResult] = TTLCache()
    generator = SlowGenerator()
    posters = CountingPosters()
    service = SearchService(cache, generator, posters)

    result = asyncio.run(service.search("듄"))

    assert result.success is True
    assert result.work.title == "듄"
    assert result.poster_url == "https://image.tmdb.org/t/p/w500/dune.jpg"
    assert result.to_payload()["posterUrl"] == result.poster_url
    assert cache.get("듄") is result


def test_cache_hit_does_not_touch_clients():
    cache: TTLCache[CompositeResult] = TTLCache()
    stored = CompositeResult(work=WorkRecord(title="듄", order=["소설"]), poster_url=None)
    cache.put("듄", stored)
    generator = SlowGenerator()
    posters = CountingPosters()
    service = SearchService(cache, generator, posters)

    assert asyncio.run(service.search("듄")) is stored
    assert generator.calls == 0
    assert posters.calls == 0


def test_cache_key_is_the_raw_query():
    generator = SlowGenerator()
    service = SearchService(TTLCache(), generator, CountingPosters())

    async def run() -> None:
        await service.search("dune")
        await service.search("Dune")
        await service.search("dune")

    asyncio.run(run())

    assert generator.calls == 2


def test_concurrent_misses_share_one_resolution():
    generator = SlowGenerator()
    posters = CountingPosters()
    service = SearchService(TTLCache(), generator, posters)

    async def run() -> list[CompositeResult]:
        return await asyncio.gather(*(service.search("듄") for _ in range(5)))

    results = asyncio.run(run())

    assert generator.calls == 1
    assert posters.calls == 1
    assert all(result is results[0] for result in results)


def test_concurrent_failures_propagate_and_are_not_cached():
    generator = SlowGenerator(text="no json")
    service = SearchService(TTLCache(), generator, CountingPosters())

    async def run() -> list[object]:
        return await asyncio.gather(*(service.search("x") for _ in range(3)), return_exceptions=True)

    outcomes = asyncio.run(run())

    assert all(isinstance(outcome, ExtractionError) for outcome in outcomes)
    assert generator.calls == 1

    with pytest.raises(ExtractionError):
        asyncio.run(service.search("x"))
    assert generator.calls == 2


def test_failure_after_all_waiters_cancel_is_retrieved():
    generator = SlowGenerator(text="no json")
    service = SearchService(TTLCache(), generator, CountingPosters())
    reported: list[dict] = []

    async def run() -> None:
        asyncio.get_running_loop().set_exception_handler(lambda _, context: reported.append(context))
        waiter = asyncio.ensure_future(service.search("x"))
        await asyncio.sleep(0)
        waiter.cancel()
        await asyncio.sleep(0.05)
        gc.collect()

    asyncio.run(run())

    assert generator.calls == 1
    assert not [context for context in reported if "never retrieved" in context.get("message", "")]


class BrokenPosters:
    async def find_poster_url(self, term: str) -> str | None:
        raise RuntimeError("boom")


def test_poster_errors_are_not_fatal():
    cache: TTLCache[CompositeResult] = TTLCache()
    service = SearchService(cache, SlowGenerator(), BrokenPosters())

    result = asyncio.run(service.search("듄"))

    assert result.poster_url is None
    assert cache.get("듄") is result
