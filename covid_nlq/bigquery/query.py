"""Safe BigQuery query helpers.

These helpers never interpolate values into SQL: every value of the parameter mapping is bound as a
typed named query parameter (`@name`).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from google.cloud import bigquery


def _parameter_type(value: Any) -> str:
    # bool first: it is a subclass of int.
    if isinstance(value, bool):
        return "BOOL"
    if isinstance(value, int):
        return "INT64"
    if isinstance(value, float):
        return "FLOAT64"
    if isinstance(value, str):
        return "STRING"
    raise TypeError(f"Unsupported query parameter type: {type(value).__name__}")


def query_parameters(params: Mapping[str, Any]) -> list[bigquery.ScalarQueryParameter]:
    """Convert a `{name: value}` mapping into typed BigQuery named parameters."""

    return [
        bigquery.ScalarQueryParameter(name, _parameter_type(value), value)
        for name, value in params.items()
    ]


def fetch_rows(
        client: bigquery.Client,
        sql: str,
        params: Mapping[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Execute a parameterized query and return all rows as plain dicts.

    Contract:
        - The query must be parameterized; all values are passed via `params`.
        - BigQuery errors are not swallowed (caller decides how to handle them).
    """

    job_config = bigquery.QueryJobConfig(query_parameters=query_parameters(params or {}))
    job = client.query(sql, job_config=job_config)
    return [dict(row.items()) for row in job.result()]
