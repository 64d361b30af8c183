"""Application composition root.

This module wires together configuration and the BigQuery client for the tool handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from google.cloud import bigquery

from covid_nlq.bigquery.client import create_bigquery_client
from covid_nlq.config.settings import Settings


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    bigquery_client: bigquery.Client | None


def create_app(settings: Settings, *, connect: bool = True) -> App:
    """Create the application container.

    Note:
        With `connect=False` no BigQuery client is created; only the model-call tools work then.
    """

    client = create_bigquery_client(settings) if connect else None
    return App(settings=settings, bigquery_client=client)
