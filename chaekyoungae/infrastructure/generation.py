"""Generation provider hooks.

The search pipeline only needs a coroutine that turns a prompt into text.
``UnconfiguredGenerationClient`` stands in when no API key is present so the
application still starts; every search then fails with an upstream error.
"""
from __future__ import annotations

from typing import Protocol

from chaekyoungae.core.errors import UpstreamError


class GenerationClient(Protocol):
    """Contract for text-generation integrations."""

    async def generate(self, prompt: str) -> str:
        """Return the raw model answer for ``prompt``."""


class UnconfiguredGenerationClient:
    """Fallback client used when no generation credential is configured."""

    def __init__(self, setting: str = "GEMINI_API_KEY") -> None:
        self._setting = setting

    async def generate(self, prompt: str) -> str:
        raise UpstreamError(f"{self._setting} is not configured")
