"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from grants_ingest.normalize.dates import DEFAULT_DATE_FORMATS, validate_format_names


class SQSConfig(BaseSettings):
    """SQS queue configuration."""

    model_config = {"env_prefix": "GRANTS_INGEST_SQS_", "populate_by_name": True}

    queue_url: str = Field(
        default="",
        validation_alias=AliasChoices(
            "GRANTS_INGEST_SQS_QUEUE_URL",
            "GRANTS_INGEST_EVENTS_QUEUE_URL",  # legacy name used by the deploy manifests
        ),
    )
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    wait_time_seconds: int = Field(default=20, ge=0, le=20)
    max_messages: int = Field(default=10, ge=1, le=10)


class DatabaseConfig(BaseSettings):
    """PostgreSQL grant store configuration."""

    model_config = {"env_prefix": "GRANTS_INGEST_DB_"}

    dsn: str = ""
    min_pool_size: int = 1
    max_pool_size: int = 10
    command_timeout: float = 30.0


class NormalizerConfig(BaseSettings):
    """Record normalizer configuration."""

    model_config = {"env_prefix": "GRANTS_INGEST_NORMALIZE_"}

    date_formats: list[str] = Field(default_factory=lambda: list(DEFAULT_DATE_FORMATS))

    @field_validator("date_formats")
    @classmethod
    def _known_formats(cls, value: list[str]) -> list[str]:
        return list(validate_format_names(value))


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "GRANTS_INGEST_"}

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    sqs: SQSConfig = Field(default_factory=SQSConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
