"""Tests for the command-line entrypoint (settings and app construction stubbed)."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest

from covid_nlq.tools import main as cli


@pytest.fixture
def stub_app(monkeypatch: pytest.MonkeyPatch) -> list[bool]:
    connects: list[bool] = []
    settings = SimpleNamespace(covid_table="t.table", default_row_limit=5)

    def _fake_create_app(_settings: Any, *, connect: bool = True) -> Any:
        connects.append(connect)
        return SimpleNamespace(settings=settings, bigquery_client=object() if connect else None)

    monkeypatch.setattr(cli, "load_settings", lambda: settings)
    monkeypatch.setattr(cli, "create_app", _fake_create_app)
    monkeypatch.setattr(
        "covid_nlq.tools.handlers.fetch_rows",
        lambda _client, sql, params: [{"sql": sql, "params": dict(params)}],
    )
    return connects


def test_keys_needs_no_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    def _unexpected() -> None:
        raise AssertionError("settings must not be loaded")

    monkeypatch.setattr(cli, "load_settings", _unexpected)
    assert json.loads(cli.run(["keys"]))[0]["key"] == "country_name"


def test_describe_renders_object() -> None:
    text = cli.run(["describe", '{"country_name": "Japan", "date": ""}'])
    assert "country_name: Japan" in text
    assert "date:" not in text


def test_describe_rejects_non_object() -> None:
    assert cli.run(["describe", "[1, 2]"]).startswith("[ERROR] ")
    assert cli.run(["describe", "{oops"]).startswith("[ERROR] ")


def test_list_command(stub_app: list[bool]) -> None:
    rows = json.loads(cli.run(["list", "--limit", "3"]))
    assert rows == [{"sql": "SELECT * FROM t.table LIMIT 3", "params": {}}]
    assert stub_app == [True]


def test_query_command_passes_only_given_filters(stub_app: list[bool]) -> None:
    rows = json.loads(cli.run(["query", "--country-name", "Japan", "--latitude", "35.5"]))
    assert rows == [
        {
            "sql": "SELECT * FROM t.table WHERE country_name = @country_name "
                   "AND latitude = @latitude LIMIT 5",
            "params": {"country_name": "Japan", "latitude": 35.5},
        },
    ]


def test_main_exits_non_zero_on_error(monkeypatch: pytest.MonkeyPatch, stub_app: list[bool]) -> None:
    monkeypatch.setattr("sys.argv", ["covid-nlq", "list", "--limit", "99"])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    assert exc_info.value.code == 1
