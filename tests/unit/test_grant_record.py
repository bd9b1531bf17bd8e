"""Tests for the CanonicalGrantRecord model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from grants_ingest.models.grant import CanonicalGrantRecord, OpportunityCategory


def test_defaults_mark_record_as_fresh_ingest():
    record = CanonicalGrantRecord(external_id="X1", open_date="2024-01-15")
    assert record.status == "inbox"
    assert record.close_date == "2100-01-01"
    assert record.reviewer_name == "none"
    assert record.cost_sharing_required == "No"


@pytest.mark.parametrize("external_id", ["", "   "])
def test_blank_external_id_rejected(external_id):
    with pytest.raises(ValidationError):
        CanonicalGrantRecord(external_id=external_id, open_date="2024-01-15")


def test_external_id_stored_as_sent():
    record = CanonicalGrantRecord(external_id=" X1 ", open_date="2024-01-15")
    assert record.external_id == " X1 "
    assert record.to_row()["grant_id"] == " X1 "


def test_negative_award_rejected():
    with pytest.raises(ValidationError):
        CanonicalGrantRecord(external_id="X1", open_date="2024-01-15", award_ceiling=-5)


def test_to_row_uses_table_column_names():
    record = CanonicalGrantRecord(
        external_id="X1",
        external_number="ABC-24-001",
        cost_sharing_required="Yes",
        category=OpportunityCategory.EARMARK,
        category_list="10.001, 10.002",
        open_date="2024-01-15",
    )
    row = record.to_row()
    assert row["grant_id"] == "X1"
    assert row["grant_number"] == "ABC-24-001"
    assert row["cost_sharing"] == "Yes"
    assert row["opportunity_category"] == "Earmark"
    assert row["cfda_list"] == "10.001, 10.002"
    assert row["search_terms"] == "[in title/desc]+"


def test_to_row_without_category_is_null():
    row = CanonicalGrantRecord(external_id="X1", open_date="2024-01-15").to_row()
    assert row["opportunity_category"] is None
