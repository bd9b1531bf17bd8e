"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from grants_ingest.core.exceptions import PersistenceError
from grants_ingest.core.types import GrantId
from grants_ingest.models.grant import CanonicalGrantRecord


class MemoryGrantStore:
    """Dict-backed IGrantStore for unit tests.

    Mirrors the Postgres upsert: one row per ``external_id``, full replace on
    conflict, ``updated_at`` refreshed on every replace.
    """

    def __init__(self) -> None:
        self._rows: dict[str, dict[str, Any]] = {}
        self._failures: dict[str, Exception] = {}
        self.upsert_calls: list[str] = []
        self.closed = False

    def fail_on(self, external_id: GrantId, exc: Exception | None = None) -> None:
        """Make the next upserts for ``external_id`` raise."""
        self._failures[external_id] = exc or PersistenceError(f"simulated failure for {external_id}")

    def get(self, external_id: GrantId) -> dict[str, Any] | None:
        return self._rows.get(external_id)

    def __len__(self) -> int:
        return len(self._rows)

    async def connect(self) -> None:
        self.closed = False

    async def upsert_grant(self, grant: CanonicalGrantRecord) -> None:
        self.upsert_calls.append(grant.external_id)
        if grant.external_id in self._failures:
            raise self._failures[grant.external_id]

        now = datetime.now(timezone.utc)
        row = grant.to_row()
        existing = self._rows.get(grant.external_id)
        row["created_at"] = existing["created_at"] if existing else now
        row["updated_at"] = now
        self._rows[grant.external_id] = row

    async def close(self) -> None:
        self.closed = True
