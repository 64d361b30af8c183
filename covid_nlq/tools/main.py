"""Command-line entrypoint for the COVID data tools."""

from __future__ import annotations

import argparse
import json
import sys

from covid_nlq.app import create_app
from covid_nlq.config.logging import configure_logging
from covid_nlq.config.settings import load_settings
from covid_nlq.tools import handlers

_COMMANDS_NEEDING_BIGQUERY = {"list", "query", "ask"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query COVID-19 open data on BigQuery.")
    parser.add_argument("--log-level", help="Override LOG_LEVEL (e.g. DEBUG).")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List rows without filters.")
    list_cmd.add_argument(
        "--limit",
        type=int,
        required=True,
        help=f"Number of rows ({handlers.LIST_LIMIT_MIN}-{handlers.LIST_LIMIT_MAX}).",
    )

    parse_cmd = sub.add_parser("parse", help="Parse natural language into COVID query JSON.")
    parse_cmd.add_argument("text")

    query_cmd = sub.add_parser("query", help="Query with structured filters.")
    query_cmd.add_argument("--country-name", dest="country_name")
    query_cmd.add_argument("--latitude", type=float)
    query_cmd.add_argument("--longitude", type=float)
    query_cmd.add_argument("--date", help="YYYY-MM-DD")

    ask_cmd = sub.add_parser("ask", help="Query with a natural-language request.")
    ask_cmd.add_argument("text")

    describe_cmd = sub.add_parser("describe", help="Render a JSON object as key: value lines.")
    describe_cmd.add_argument("data", help="A JSON object.")

    sub.add_parser("keys", help="Show the keys a COVID query may contain.")
    return parser


def run(argv: list[str] | None = None) -> str:
    """Run one tool command and return its payload."""

    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "keys":
        return handlers.get_covid_json_keys()

    if args.command == "describe":
        try:
            data = json.loads(args.data)
        except json.JSONDecodeError as exc:
            return handlers.ERROR_PREFIX + f"invalid JSON: {exc.msg}"
        if not isinstance(data, dict):
            return handlers.ERROR_PREFIX + "expected a JSON object"
        return handlers.json_to_nl(data)

    settings = load_settings()
    app = create_app(settings, connect=args.command in _COMMANDS_NEEDING_BIGQUERY)

    if args.command == "list":
        return handlers.search_covid_list(app, args.limit)
    if args.command == "parse":
        return handlers.parse_covid_json(app, args.text)
    if args.command == "ask":
        return handlers.nl_covid_query(app, args.text)

    filters = {
        name: getattr(args, name)
        for name in ("country_name", "latitude", "longitude", "date")
        if getattr(args, name) is not None
    }
    return handlers.query_covid_data(app, filters)


def main() -> None:
    """CLI entry point; exits non-zero when the payload is an error."""

    payload = run()
    print(payload)
    if payload.startswith(handlers.ERROR_PREFIX):
        sys.exit(1)


if __name__ == "__main__":
    main()
