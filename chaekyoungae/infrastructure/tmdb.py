"""Integration with The Movie Database (TMDB) search API."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

TMDB_API_BASE = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/w500"


class TMDBPosterClient:
    """Looks up poster artwork through TMDB's multi-type search endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        api_base: str = TMDB_API_BASE,
        image_base: str = TMDB_IMAGE_BASE,
        language: str = "ko-KR",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(api_base)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("api_base must include scheme and host")

        self._api_key = api_key
        self._search_url = f"{api_base.rstrip('/')}/search/multi"
        self._image_base = image_base.rstrip("/")
        self._language = language
        self._timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _http_client(self) -> httpx.AsyncClient:
        # owned clients are opened on first use and again after close()
        if self._client is None or (self._owns_client and self._client.is_closed):
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _build_params(self, term: str) -> dict[str, str]:
        return {
            "api_key": self._api_key,
            "query": term,
            "language": self._language,
        }

    @staticmethod
    def _first_poster_path(payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        results = payload.get("results")
        if not isinstance(results, list):
            return None
        for item in results:
            if isinstance(item, dict) and item.get("poster_path"):
                return str(item["poster_path"])
        return None

    def _image_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._image_base}{path}"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def find_poster_url(self, term: str) -> str | None:
        if not term or not term.strip():
            return None
        try:
            response = await self._http_client().get(self._search_url, params=self._build_params(term))
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("TMDB poster lookup failed for %r: %s", term, exc)
            return None

        path = self._first_poster_path(payload)
        if path is None:
            logger.info("TMDB returned no poster for %r", term)
            return None
        return self._image_url(path)

    async def close(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["TMDBPosterClient", "TMDB_API_BASE", "TMDB_IMAGE_BASE"]
