"""Application services."""

from .search import SearchService

__all__ = [
    "SearchService",
]
