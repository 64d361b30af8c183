"""COVID query parser orchestration (model call, then extraction)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from covid_nlq.extraction.extractor import Extracted, ExtractionResult, extract
from covid_nlq.extraction.llm_client import LLMConfig, generate
from covid_nlq.extraction.schema import CovidQuery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOutcome:
    """Raw model text plus the extraction result derived from it."""

    raw_output: str
    result: ExtractionResult


@lru_cache(maxsize=1)
def load_prompt() -> str:
    prompt_path = Path(__file__).resolve().parent / "prompt_covid_v1.md"
    return prompt_path.read_text(encoding="utf-8")


def parse_covid_query(text: str, *, config: LLMConfig) -> ParseOutcome:
    """Ask the model for COVID query JSON and validate it against `CovidQuery`.

    Model-call errors (`LLMClientError`) propagate; a malformed response does not raise and is
    reported through `ParseOutcome.result`.
    """

    raw_output = generate(load_prompt(), text, config=config)
    result = extract(raw_output, CovidQuery)

    if isinstance(result, Extracted):
        logger.info("parsed stage=%s fields=%s", result.stage, sorted(result.record))
    else:
        logger.info("malformed model response length=%d", len(raw_output))

    return ParseOutcome(raw_output=raw_output, result=result)
