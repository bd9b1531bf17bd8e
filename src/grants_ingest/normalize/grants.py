"""Normalize grants-ingest opportunity messages into CanonicalGrantRecord."""

from __future__ import annotations

import json
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from grants_ingest.core.exceptions import ParseError
from grants_ingest.core.types import JsonDict
from grants_ingest.models.grant import CATEGORY_CODES, FAR_FUTURE_CLOSE_DATE, CanonicalGrantRecord
from grants_ingest.normalize.dates import DEFAULT_DATE_FORMATS, normalize_date_string

# Largest amount a Postgres bigint column holds.
MAX_AWARD_AMOUNT = 2**63 - 1


def _whole_number(value: Any) -> int | None:
    """Return a positive whole number that fits a bigint, or None for anything else."""
    if isinstance(value, bool) or not value:
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return None
        # adjusted() is the decimal exponent; checked before int() expands it.
        if not parsed.is_finite() or parsed.adjusted() > 18:
            return None
        if parsed != parsed.to_integral_value():
            return None
        number = int(parsed)
    else:
        return None
    return number if 0 < number <= MAX_AWARD_AMOUNT else None


def _text(value: Any) -> Any:
    """Text fields arrive as JSON numbers from some feeds; keep them as text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _joined(data: JsonDict, key: str, sep: str) -> str:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise ParseError(f"{key} must be a list, got {type(items).__name__}")
    return sep.join(str(item) for item in items)


def parse_message_body(body: str) -> JsonDict:
    """Decode a message body that must hold a JSON object."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Message body is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ParseError(f"Message body must be a JSON object, got {type(data).__name__}")
    return data


def message_to_grant(
    body: str, *, date_formats: Sequence[str] = DEFAULT_DATE_FORMATS
) -> CanonicalGrantRecord:
    """Build a CanonicalGrantRecord from a raw opportunity message body.

    Raises:
        ParseError: the body is malformed, has the wrong shape, or lacks an
            identifier.
        DateFormatError: ``PostDate``/``CloseDate`` match none of ``date_formats``.
    """
    data = parse_message_body(body)
    category_code = data.get("OpportunityCategory")
    close_date = data.get("CloseDate")

    try:
        return CanonicalGrantRecord(
            external_id=_text(data.get("OpportunityId") or data.get("grant_id") or ""),
            external_number=_text(data.get("OpportunityNumber")),
            agency_code=_text(data.get("AgencyCode")),
            award_ceiling=_whole_number(data.get("AwardCeiling")),
            award_floor=_whole_number(data.get("AwardFloor")),
            cost_sharing_required="Yes" if data.get("CostSharingOrMatchingRequirement") else "No",
            title=_text(data.get("OpportunityTitle")),
            category_list=_joined(data, "CFDANumbers", ", "),
            open_date=normalize_date_string(data.get("PostDate"), date_formats),
            close_date=(
                normalize_date_string(close_date, date_formats) if close_date else FAR_FUTURE_CLOSE_DATE
            ),
            category=CATEGORY_CODES.get(category_code) if isinstance(category_code, str) else None,
            description=_text(data.get("Description")),
            eligibility_codes=_joined(data, "EligibleApplicants", " "),
            raw_body=body,
        )
    except ValidationError as exc:
        raise ParseError(f"Message does not describe a valid grant: {exc}") from exc
