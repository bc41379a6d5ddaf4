"""Integration with the Google Gemini API."""
from __future__ import annotations

import logging

from google import genai

from chaekyoungae.core.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"


class GeminiGenerationClient:
    """Async client sending one prompt per call to a Gemini model."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        client: genai.Client | None = None,
    ) -> None:
        if not api_key and client is None:
            raise ValueError("api_key is required")
        self._model = model
        self._client = client or genai.Client(api_key=api_key)

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
            )
            text = response.text
        except Exception as exc:
            raise UpstreamError(f"Gemini request failed: {exc}") from exc

        if not text:
            raise UpstreamError("Gemini returned an empty response")
        logger.debug("Gemini %s answered with %d chars", self._model, len(text))
        return text


__all__ = ["GeminiGenerationClient", "DEFAULT_MODEL"]
