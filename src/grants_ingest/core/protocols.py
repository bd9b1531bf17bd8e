"""Protocol interfaces for the grants-ingest pipeline seams.

Backends satisfy these structurally; no inheritance required, easy to swap
for the in-memory fakes in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from grants_ingest.core.types import ReceiptHandle

if TYPE_CHECKING:
    from grants_ingest.models.grant import CanonicalGrantRecord
    from grants_ingest.models.message import QueueMessage


# ---------------------------------------------------------------------------
# Persistence: Grant Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IGrantStore(Protocol):
    """Relational grant store with upsert-by-external-id semantics."""

    async def connect(self) -> None: ...

    async def upsert_grant(self, grant: CanonicalGrantRecord) -> None: ...

    async def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Transport: Work Queue
# ---------------------------------------------------------------------------

@runtime_checkable
class IQueueClient(Protocol):
    """Long-polling work queue (SQS-compatible)."""

    @property
    def queue_url(self) -> str: ...

    async def receive_batch(self) -> list[QueueMessage]: ...

    async def delete_message(self, receipt_handle: ReceiptHandle) -> None: ...
