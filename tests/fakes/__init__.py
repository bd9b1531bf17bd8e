"""Shared test doubles: re-export in-memory backends."""

from __future__ import annotations

from grants_ingest.persistence.memory_backend import MemoryGrantStore
from grants_ingest.queue.memory_backend import MemoryQueueClient

__all__ = ["MemoryGrantStore", "MemoryQueueClient"]
