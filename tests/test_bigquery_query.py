"""Tests for BigQuery parameter binding and row fetching (client faked)."""

from __future__ import annotations

from typing import Any

import pytest

from covid_nlq.bigquery.query import fetch_rows, query_parameters


class _FakeJob:
    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows

    def result(self) -> list[dict[str, Any]]:
        return self._rows


class _FakeClient:
    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self.rows = rows
        self.calls: list[tuple[str, Any]] = []

    def query(self, sql: str, job_config: Any = None) -> _FakeJob:
        self.calls.append((sql, job_config))
        return _FakeJob(self.rows)


def test_query_parameters_are_typed() -> None:
    params = query_parameters(
        {"country_name": "Japan", "latitude": 35.5, "population": 10, "active": True},
    )
    assert [(p.name, p.type_, p.value) for p in params] == [
        ("country_name", "STRING", "Japan"),
        ("latitude", "FLOAT64", 35.5),
        ("population", "INT64", 10),
        ("active", "BOOL", True),
    ]


def test_query_parameters_reject_nested_values() -> None:
    with pytest.raises(TypeError):
        query_parameters({"country_name": ["Japan"]})


def test_fetch_rows_binds_parameters() -> None:
    client = _FakeClient([{"country_name": "Japan", "new_confirmed": 12}])
    sql = "SELECT * FROM t.table WHERE country_name = @country_name LIMIT 5"

    rows = fetch_rows(client, sql, {"country_name": "Japan"})  # type: ignore[arg-type]

    assert rows == [{"country_name": "Japan", "new_confirmed": 12}]
    sent_sql, job_config = client.calls[0]
    assert sent_sql == sql
    [param] = job_config.query_parameters
    assert (param.name, param.type_, param.value) == ("country_name", "STRING", "Japan")


def test_fetch_rows_without_params() -> None:
    client = _FakeClient([])
    assert fetch_rows(client, "SELECT * FROM t.table LIMIT 5") == []  # type: ignore[arg-type]
    assert client.calls[0][1].query_parameters == []
