"""Unit tests for the in-memory grant store fake."""

from __future__ import annotations

import asyncio

import pytest

from grants_ingest.core.exceptions import PersistenceError
from grants_ingest.core.protocols import IGrantStore
from grants_ingest.models.grant import CanonicalGrantRecord
from tests.fakes import MemoryGrantStore


def _grant(external_id: str = "X1", title: str = "Grant A") -> CanonicalGrantRecord:
    return CanonicalGrantRecord(external_id=external_id, title=title, open_date="2024-01-15")


@pytest.fixture
def store():
    return MemoryGrantStore()


def test_satisfies_protocol(store):
    assert isinstance(store, IGrantStore)


class TestUpsert:
    def test_inserts_new_grant(self, store):
        asyncio.run(store.upsert_grant(_grant()))
        assert len(store) == 1
        assert store.get("X1")["title"] == "Grant A"

    def test_same_id_twice_keeps_one_row_with_latest_title(self, store):
        asyncio.run(store.upsert_grant(_grant(title="Grant A")))
        asyncio.run(store.upsert_grant(_grant(title="Grant A (amended)")))
        assert len(store) == 1
        assert store.get("X1")["title"] == "Grant A (amended)"

    def test_replace_refreshes_updated_at_and_keeps_created_at(self, store):
        asyncio.run(store.upsert_grant(_grant()))
        first = dict(store.get("X1"))
        asyncio.run(store.upsert_grant(_grant(title="B")))
        second = store.get("X1")
        assert second["created_at"] == first["created_at"]
        assert second["updated_at"] >= first["updated_at"]

    def test_replace_is_full_not_merge(self, store):
        asyncio.run(store.upsert_grant(
            CanonicalGrantRecord(external_id="X1", open_date="2024-01-15", description="old text")
        ))
        asyncio.run(store.upsert_grant(_grant()))
        assert store.get("X1")["description"] is None


class TestFailureInjection:
    def test_fail_on_raises_persistence_error(self, store):
        store.fail_on("X1")
        with pytest.raises(PersistenceError):
            asyncio.run(store.upsert_grant(_grant()))
        assert store.get("X1") is None
        assert store.upsert_calls == ["X1"]
