"""Canonical Grant Record: the store-ready form of a grant opportunity.

Every inbound opportunity message, whatever the upstream field spelling, is
normalized into this schema before it reaches the grant store.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

FAR_FUTURE_CLOSE_DATE = "2100-01-01"


class OpportunityCategory(StrEnum):
    CONTINUATION = "Continuation"
    DISCRETIONARY = "Discretionary"
    EARMARK = "Earmark"
    MANDATORY = "Mandatory"
    OTHER = "Other"


CATEGORY_CODES: dict[str, OpportunityCategory] = {
    "C": OpportunityCategory.CONTINUATION,
    "D": OpportunityCategory.DISCRETIONARY,
    "E": OpportunityCategory.EARMARK,
    "M": OpportunityCategory.MANDATORY,
    "O": OpportunityCategory.OTHER,
}


class CanonicalGrantRecord(BaseModel):
    """Single grant opportunity in canonical format."""

    # --- Identity Fields ---
    external_id: str = Field(min_length=1)
    external_number: Optional[str] = None
    agency_code: Optional[str] = None

    # --- Award Fields ---
    award_ceiling: Optional[int] = Field(default=None, ge=0)
    award_floor: Optional[int] = Field(default=None, ge=0)
    cost_sharing_required: Literal["Yes", "No"] = "No"

    # --- Descriptive Fields ---
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[OpportunityCategory] = None
    category_list: str = ""  # CFDA program numbers, ", "-joined
    eligibility_codes: str = ""  # space-joined

    # --- Dates (YYYY-MM-DD) ---
    open_date: str
    close_date: str = FAR_FUTURE_CLOSE_DATE

    # --- Ingestion Metadata ---
    status: Literal["inbox"] = "inbox"
    opportunity_status: str = "posted"
    notes: str = "auto-inserted by script"
    search_terms: str = "[in title/desc]+"
    reviewer_name: str = "none"
    raw_body: str = ""

    model_config = {"frozen": True}

    @field_validator("external_id")
    @classmethod
    def _reject_blank_id(cls, value: str) -> str:
        # Stored verbatim; upserts key on the id exactly as sent.
        if not value.strip():
            raise ValueError("external_id must not be blank")
        return value

    def to_row(self) -> dict[str, Any]:
        """Map the record onto ``grants`` table column names."""
        return {
            "grant_id": self.external_id,
            "grant_number": self.external_number,
            "agency_code": self.agency_code,
            "award_ceiling": self.award_ceiling,
            "award_floor": self.award_floor,
            "cost_sharing": self.cost_sharing_required,
            "title": self.title,
            "cfda_list": self.category_list,
            "open_date": self.open_date,
            "close_date": self.close_date,
            "opportunity_category": self.category.value if self.category else None,
            "description": self.description,
            "eligibility_codes": self.eligibility_codes,
            "status": self.status,
            "opportunity_status": self.opportunity_status,
            "notes": self.notes,
            "search_terms": self.search_terms,
            "reviewer_name": self.reviewer_name,
            "raw_body": self.raw_body,
        }
