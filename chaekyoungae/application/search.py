"""Application service resolving a title query into a composite result."""
from __future__ import annotations

import asyncio
import logging

from chaekyoungae.core.extraction import extract_work_record
from chaekyoungae.core.prompts import build_prompt
from chaekyoungae.core.schema import CompositeResult
from chaekyoungae.infrastructure import GenerationClient, PosterLookup, ResultCache

logger = logging.getLogger(__name__)


class SearchService:
    """Coordinates cache lookup, generation, extraction and poster enrichment."""

    def __init__(
        self,
        cache: ResultCache[CompositeResult],
        generator: GenerationClient,
        posters: PosterLookup,
    ) -> None:
        self._cache = cache
        self._generator = generator
        self._posters = posters
        self._inflight: dict[str, asyncio.Task[CompositeResult]] = {}

    async def search(self, query: str) -> CompositeResult:
        cached = self._cache.get(query)
        if cached is not None:
            logger.info("Returning cached result for: %s", query)
            return cached

        # concurrent misses for one key share a single upstream resolution
        task = self._inflight.get(query)
        if task is None:
            task = asyncio.ensure_future(self._resolve(query))
            self._inflight[query] = task
            task.add_done_callback(lambda done: self._forget(query, done))
        return await asyncio.shield(task)

    async def _resolve(self, query: str) -> CompositeResult:
        text = await self._generator.generate(build_prompt(query))
        work = extract_work_record(text)
        poster_url = await self._find_poster(work.lookup_term())

        result = CompositeResult(success=True, work=work, poster_url=poster_url)
        self._cache.put(query, result)
        logger.info("Cached result for %r (poster=%s)", query, poster_url is not None)
        return result

    async def _find_poster(self, term: str) -> str | None:
        try:
            return await self._posters.find_poster_url(term)
        except Exception:
            logger.warning("Poster lookup failed for %r", term, exc_info=True)
            return None

    def _forget(self, query: str, task: asyncio.Task[CompositeResult]) -> None:
        self._inflight.pop(query, None)
        # mark the outcome retrieved even when every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def aclose(self) -> None:
        close = getattr(self._posters, "close", None)
        if close is not None:
            await close()
