from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

OPTIONAL_TEXT_FIELDS = ("tag", "original", "recommendation", "reason")


class WorkRecord(BaseModel):
    """Structured answer produced by the generation model for one work.

    Only ``title`` and ``order`` are checked strictly.  Optional fields the
    model fills with ``null`` or an unexpected type fall back to their
    defaults instead of failing the request.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    title: str = Field(min_length=1)
    search_term: str | None = Field(default=None, alias="tmdbQuery")
    tag: str | None = None
    original: str | None = None
    recommendation: str | None = None
    reason: str | None = None
    order: tuple[str, ...]
    tips: tuple[str, ...] = ()

    @field_validator("search_term", *OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("tips", mode="before")
    @classmethod
    def _tips_or_empty(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            return (value,) if value.strip() else ()
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(item for item in value if isinstance(item, str))

    def lookup_term(self) -> str:
        """Return the term used for the poster search."""

        if self.search_term and self.search_term.strip():
            return self.search_term
        return self.title


class CompositeResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool = True
    work: WorkRecord
    poster_url: str | None = Field(default=None, alias="posterUrl")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
