"""Deterministic SELECT builder.

The builder converts a sparse field/value mapping into a parameterized BigQuery query. Field names
come from the validated schema and are used as identifiers; values only ever travel as named
`@parameters`. The table identifier and row limit are trusted configuration and are interpolated
directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

DEFAULT_ROW_LIMIT = 5


@dataclass(frozen=True)
class BuiltQuery:
    """A parameterized query ready for execution.

    `params` is a read-only view; copy it with `dict(built.params)` before changing it.
    """

    sql: str
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def _is_constraint(value: Any) -> bool:
    return value is not None and value != ""


def active_filters(filters: Mapping[str, Any]) -> dict[str, Any]:
    """Drop entries that do not constrain anything (`None` or empty string), keeping order."""

    return {key: value for key, value in filters.items() if _is_constraint(value)}


def _where_and(clauses: list[str]) -> str:
    if not clauses:
        return ""
    return "WHERE " + " AND ".join(clauses)


def build_select_query(
        table: str,
        filters: Mapping[str, Any],
        limit: int = DEFAULT_ROW_LIMIT,
) -> BuiltQuery:
    """Build `SELECT * ... LIMIT n` with one equality predicate per active filter.

    An empty (or fully inactive) filter mapping yields an unconditional select.
    """

    clauses: list[str] = []
    params: dict[str, Any] = {}

    for key, value in active_filters(filters).items():
        clauses.append(f"{key} = @{key}")
        params[key] = value

    parts = [f"SELECT * FROM {table}", _where_and(clauses), f"LIMIT {limit}"]
    sql = " ".join(part for part in parts if part)
    return BuiltQuery(sql=sql, params=MappingProxyType(params))
