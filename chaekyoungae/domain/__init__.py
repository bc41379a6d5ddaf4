"""Domain layer definitions."""

from .works import CacheEntry

__all__ = [
    "CacheEntry",
]
