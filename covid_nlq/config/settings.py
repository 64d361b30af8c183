"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

Secrets (the LLM API key, the BigQuery service account key) are only referenced here; they are never
logged and never echoed back in a tool payload.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COVID_TABLE = "covid_dummy.covid19_open_data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    llm_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    llm_model: str = Field(default="gpt-4o-mini", alias="LLM_MODEL")
    llm_api_base: str = Field(default="https://api.openai.com/v1", alias="LLM_API_BASE")
    llm_timeout_s: float = Field(default=30.0, gt=0, alias="LLM_TIMEOUT_S")
    llm_temperature: float = Field(default=0.2, ge=0, le=2, alias="LLM_TEMPERATURE")

    bigquery_project_id: str | None = Field(default=None, alias="BIGQUERY_PROJECT_ID")
    bigquery_key_file: str | None = Field(default=None, alias="BIGQUERY_KEY_FILE")

    covid_table: str = Field(default=DEFAULT_COVID_TABLE, alias="COVID_TABLE")
    default_row_limit: int = Field(default=5, ge=1, alias="DEFAULT_ROW_LIMIT")

    @field_validator("covid_table")
    @classmethod
    def validate_covid_table(cls, value: str) -> str:
        """Reject a blank table identifier.

        The table name is interpolated into generated SQL as trusted configuration, so it must be
        set explicitly rather than derived from request data.
        """

        value = value.strip()
        if not value:
            raise ValueError("COVID_TABLE must not be empty")
        return value


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
