"""Poster lookup hooks used to enrich search results."""
from __future__ import annotations

from typing import Protocol


class PosterLookup(Protocol):
    """Contract for poster enrichment integrations.

    Implementations never raise: a failed lookup is reported as ``None``.
    """

    async def find_poster_url(self, term: str) -> str | None:
        """Return an absolute poster image URL for ``term`` if one exists."""


class NoOpPosterLookup:
    """Fallback used when no media database credential is configured."""

    async def find_poster_url(self, term: str) -> str | None:  # pragma: no cover - trivial
        return None
