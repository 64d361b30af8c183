"""BigQuery client construction.

Credentials come from a service account key file when `BIGQUERY_KEY_FILE` is set, otherwise from
Google application default credentials (for example `GOOGLE_APPLICATION_CREDENTIALS`).
"""

from __future__ import annotations

from dotenv import load_dotenv
from google.cloud import bigquery

from covid_nlq.config.settings import Settings


def create_bigquery_client(settings: Settings) -> bigquery.Client:
    """Create a BigQuery client for the configured project.

    Notes:
        - `.env` is loaded into the process environment first so that google-auth sees
          `GOOGLE_APPLICATION_CREDENTIALS` declared there.
        - The client is shared by every tool call of an `App`; it is safe for concurrent use.
    """

    load_dotenv(".env")

    if settings.bigquery_key_file:
        return bigquery.Client.from_service_account_json(
            settings.bigquery_key_file,
            project=settings.bigquery_project_id,
        )

    return bigquery.Client(project=settings.bigquery_project_id)
