"""Error taxonomy for the search pipeline."""
from __future__ import annotations

RAW_TEXT_LIMIT = 2000


class SearchError(Exception):
    """Base class for failures raised while answering a search request."""


class ClientError(SearchError):
    """Raised when the inbound request itself is malformed."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ExtractionError(SearchError):
    """Raised when the model output does not contain a usable JSON object."""

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.message = message
        self.raw_text = truncate(raw_text)


class ValidationError(ExtractionError):
    """Raised when the JSON object parses but lacks mandatory fields."""


class UpstreamError(SearchError):
    """Raised when the generation provider call fails."""


def truncate(text: str, limit: int = RAW_TEXT_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
