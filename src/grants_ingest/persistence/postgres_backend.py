"""PostgreSQL backend implementing IGrantStore on an asyncpg pool."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any

import asyncpg

from grants_ingest.core.exceptions import PersistenceError
from grants_ingest.core.logger import get_logger
from grants_ingest.models.grant import CanonicalGrantRecord

log = get_logger(__name__)

GRANT_COLUMNS: tuple[str, ...] = (
    "grant_id",
    "grant_number",
    "agency_code",
    "award_ceiling",
    "award_floor",
    "cost_sharing",
    "title",
    "cfda_list",
    "open_date",
    "close_date",
    "opportunity_category",
    "description",
    "eligibility_codes",
    "status",
    "opportunity_status",
    "notes",
    "search_terms",
    "reviewer_name",
    "raw_body",
)
DATE_COLUMNS = frozenset({"open_date", "close_date"})


def _build_upsert_sql(table: str) -> str:
    placeholders = ", ".join(f"${i}" for i in range(1, len(GRANT_COLUMNS) + 1))
    assignments = ",\n              ".join(
        f"{col} = excluded.{col}" for col in GRANT_COLUMNS if col != "grant_id"
    )
    return f"""
            insert into {table} ({", ".join(GRANT_COLUMNS)})
            values ({placeholders})
            on conflict (grant_id) do update set
              {assignments},
              updated_at = now()
            returning grant_id
            """


class PostgresGrantStore:
    """Production IGrantStore backed by PostgreSQL.

    The upsert is a single ``insert ... on conflict (grant_id) do update``
    statement, so competing writes for one grant are serialized by the
    database rather than by this process.
    """

    def __init__(self, dsn: str, min_pool_size: int = 1, max_pool_size: int = 10,
                 command_timeout: float = 30.0, table: str = "grants") -> None:
        self._dsn = dsn
        self._min_pool_size = min_pool_size
        self._max_pool_size = max_pool_size
        self._command_timeout = command_timeout
        self._upsert_sql = _build_upsert_sql(table)
        self._pool: asyncpg.Pool | None = None
        self._pool_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Open the connection pool. Idempotent."""
        async with self._pool_lock:
            if self._pool is not None:
                return
            if not self._dsn:
                raise PersistenceError("GRANTS_INGEST_DB_DSN is required")
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self._dsn,
                    min_size=self._min_pool_size,
                    max_size=self._max_pool_size,
                    command_timeout=self._command_timeout,
                )
            except (asyncpg.PostgresError, OSError, asyncio.TimeoutError) as exc:
                raise PersistenceError(f"Grant store unavailable: {exc}") from exc
            log.info("grant_store_connected", min_size=self._min_pool_size, max_size=self._max_pool_size)

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def _get_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            await self.connect()
        return self._pool

    @staticmethod
    def _row_values(grant: CanonicalGrantRecord) -> list[Any]:
        row = grant.to_row()
        return [
            date.fromisoformat(row[col]) if col in DATE_COLUMNS else row[col]
            for col in GRANT_COLUMNS
        ]

    async def upsert_grant(self, grant: CanonicalGrantRecord) -> None:
        pool = await self._get_pool()
        try:
            await pool.fetchval(self._upsert_sql, *self._row_values(grant))
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
            raise PersistenceError(
                f"Upsert failed for grant_id={grant.external_id!r}: {exc}"
            ) from exc
