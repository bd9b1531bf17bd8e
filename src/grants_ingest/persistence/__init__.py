"""Pluggable grant store backends behind the IGrantStore protocol."""

from __future__ import annotations

from grants_ingest.core.config import AppSettings
from grants_ingest.persistence.postgres_backend import PostgresGrantStore


def create_persistence(settings: AppSettings | None = None) -> PostgresGrantStore:
    """Create the grant store from application settings."""
    if settings is None:
        settings = AppSettings()

    return PostgresGrantStore(
        dsn=settings.database.dsn,
        min_pool_size=settings.database.min_pool_size,
        max_pool_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
    )
