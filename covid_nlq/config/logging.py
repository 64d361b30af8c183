"""Logging configuration for the COVID query tools.

Tool payloads are written to stdout by the CLI, so diagnostics always go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import dotenv_values

_QUIET_LOGGERS = ("google", "google.auth", "urllib3")


def resolve_log_level(level: str | None = None) -> int:
    """Resolve a level name from the argument, `LOG_LEVEL` (environment or `.env`), or `INFO`.

    Raises:
        ValueError: If the name is not a standard logging level.
    """

    name = (level or _env_log_level() or "INFO").strip().upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {name}")
    return value


def _env_log_level() -> str | None:
    return os.getenv("LOG_LEVEL") or dotenv_values(".env").get("LOG_LEVEL")


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process (stderr only, never part of a tool payload)."""

    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
