"""Turn free-form model output into a :class:`WorkRecord`.

The model is instructed to answer with bare JSON, but in practice the reply
may be wrapped in markdown fences or surrounded by prose.  Extraction strips
known fence markers and then scans for the first syntactically complete JSON
object, so stray braces in leading prose do not poison the result.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from chaekyoungae.core.errors import ExtractionError, ValidationError
from chaekyoungae.core.schema import WorkRecord

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse AI response"
MANDATORY_FIELDS = ("title", "order")

_FENCE_RE = re.compile(r"```(?:json|JSON)?")
_decoder = json.JSONDecoder()


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def find_json_object(text: str) -> dict[str, Any] | None:
    """Return the first complete JSON object embedded in ``text``."""

    position = text.find("{")
    while position != -1:
        try:
            value, _ = _decoder.raw_decode(text, position)
        except json.JSONDecodeError:
            position = text.find("{", position + 1)
            continue
        return value
    return None


def extract_work_record(text: str) -> WorkRecord:
    """Parse the generation output, raising on unusable responses."""

    payload = find_json_object(strip_code_fences(text))
    if payload is None:
        logger.error("No JSON object found in model response (%d chars)", len(text))
        raise ExtractionError(PARSE_FAILURE_MESSAGE, text)

    missing = [name for name in MANDATORY_FIELDS if name not in payload]
    if missing:
        raise ValidationError(f"AI response is missing required fields: {', '.join(missing)}", text)

    try:
        return WorkRecord.model_validate(payload)
    except PydanticValidationError as exc:
        fields = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
        logger.error("Model response failed validation: %s", fields)
        raise ValidationError(f"AI response has invalid fields: {', '.join(fields)}", text) from exc
