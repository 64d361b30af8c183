"""JSON extraction from untrusted LLM responses.

Model output is unreliable about whitespace and wrapping prose, but two shapes dominate: a bare JSON
object, or a JSON object inside a fenced code block. The extractor tries them in that order and
validates against a Pydantic model. It never raises for malformed input; failure is a value that
keeps the raw text for diagnostics.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# First fenced block wins; the optional language tag is only recognized as "json".
_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", flags=re.IGNORECASE)

ExtractionStage = Literal["direct", "fenced"]


@dataclass(frozen=True)
class Extracted:
    """A validated record plus the stage that produced it."""

    record: dict[str, Any]
    stage: ExtractionStage


@dataclass(frozen=True)
class MalformedResponse:
    """Neither stage produced a valid object; `raw_text` is the input exactly as received."""

    raw_text: str


ExtractionResult = Extracted | MalformedResponse


def _parse_and_validate(candidate: str, schema: type[BaseModel]) -> dict[str, Any] | None:
    try:
        obj = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, oversized integer literals and excessive nesting.
        logger.debug("candidate is not JSON: %s", type(exc).__name__)
        return None

    try:
        model = schema.model_validate(obj)
    except ValidationError as exc:
        logger.debug("candidate failed validation errors=%d", exc.error_count())
        return None

    return model.model_dump(exclude_unset=True)


def extract(text: str, schema: type[BaseModel]) -> ExtractionResult:
    """Recover a single JSON object from `text` and validate it against `schema`.

    Strategy:
        1) Parse the whole (stripped) text as JSON.
        2) Otherwise parse the body of the first fenced code block.
        3) Otherwise return `MalformedResponse` carrying `text` unchanged.
    """

    candidate = text.strip()

    record = _parse_and_validate(candidate, schema)
    if record is not None:
        return Extracted(record=record, stage="direct")

    match = _FENCED_BLOCK_RE.search(candidate)
    if match:
        record = _parse_and_validate(match.group(1), schema)
        if record is not None:
            return Extracted(record=record, stage="fenced")

    return MalformedResponse(raw_text=text)
