"""COVID data tool handlers.

Hard contract: every handler returns exactly one text payload and never raises. Failures are
rendered as a payload starting with `[ERROR] `; when the model output cannot be parsed, the raw
model text is included verbatim so a human can see why.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from time import monotonic
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from covid_nlq.app import App
from covid_nlq.bigquery.query import fetch_rows
from covid_nlq.extraction.extractor import MalformedResponse
from covid_nlq.extraction.llm_client import LLMClientError, llm_config_from_settings
from covid_nlq.extraction.parser import parse_covid_query
from covid_nlq.extraction.schema import covid_query_from_obj, describe_covid_fields
from covid_nlq.sql.builder import BuiltQuery, active_filters, build_select_query

logger = logging.getLogger(__name__)

ERROR_PREFIX = "[ERROR] "
LIST_LIMIT_MIN = 1
LIST_LIMIT_MAX = 30


class ListRequest(BaseModel):
    """Arguments of the plain listing tool."""

    limit: int = Field(ge=LIST_LIMIT_MIN, le=LIST_LIMIT_MAX)


def _error(message: str) -> str:
    return ERROR_PREFIX + message


def _to_json(value: Any) -> str:
    # `default=str` renders BigQuery DATE/NUMERIC/TIMESTAMP values.
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _run_query(app: App, built: BuiltQuery) -> str:
    if app.bigquery_client is None:
        return _error("BigQuery client is not configured")

    started = monotonic()

    # noinspection PyBroadException
    try:
        rows = fetch_rows(app.bigquery_client, built.sql, built.params)
    except Exception as exc:
        # Handler boundary: execution errors become an error payload instead of a crash.
        logger.exception("query failed sql=%s", built.sql)
        return _error(str(exc))

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "query ok filters=%s rows=%d latency_ms=%d",
        sorted(built.params),
        len(rows),
        latency_ms,
    )
    return _to_json(rows)


def _parse_record(app: App, text: str) -> dict[str, Any] | str:
    """Return the extracted record, or an error payload."""

    try:
        outcome = parse_covid_query(text, config=llm_config_from_settings(app.settings))
    except LLMClientError as exc:
        logger.info("model call failed reason=%s", exc)
        return _error(str(exc))

    if isinstance(outcome.result, MalformedResponse):
        return _error("LLM response is not a valid JSON: " + outcome.result.raw_text)

    return outcome.result.record


def search_covid_list(app: App, limit: int) -> str:
    """List up to `limit` (1..30) rows of the COVID table without any filter."""

    try:
        request = ListRequest(limit=limit)
    except ValidationError as exc:
        return _error(str(exc))

    built = build_select_query(app.settings.covid_table, {}, request.limit)
    return _run_query(app, built)


def parse_covid_json(app: App, text: str) -> str:
    """Turn a natural-language request into validated COVID query JSON."""

    record = _parse_record(app, text)
    if isinstance(record, str):
        return record
    return _to_json(record)


def query_covid_data(app: App, args: Mapping[str, Any]) -> str:
    """Query the COVID table with structured equality filters."""

    try:
        query = covid_query_from_obj(dict(args))
    except ValidationError as exc:
        return _error(str(exc))

    built = build_select_query(
        app.settings.covid_table,
        query.model_dump(exclude_unset=True),
        app.settings.default_row_limit,
    )
    return _run_query(app, built)


def nl_covid_query(app: App, text: str) -> str:
    """Query the COVID table with a natural-language request."""

    record = _parse_record(app, text)
    if isinstance(record, str):
        return record

    built = build_select_query(app.settings.covid_table, record, app.settings.default_row_limit)
    return _run_query(app, built)


def json_to_nl(data: Mapping[str, Any]) -> str:
    """Render a JSON object as `key: value` lines for user confirmation."""

    entries = [f"{key}: {value}" for key, value in active_filters(data).items()]
    if not entries:
        return "(no data)"
    return "The provided information is as follows:\n" + "\n".join(entries) + "\nIs this correct?"


def get_covid_json_keys() -> str:
    """Return the keys and types a COVID query may contain, as compact JSON."""

    return json.dumps(describe_covid_fields())
