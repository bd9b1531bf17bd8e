"""Strict date normalization over an ordered list of named input formats.

Each format is a full-string pattern plus calendar validation, so partial or
unpadded input never matches. Formats are tried in order and the first match
wins; exhausting the list raises ``DateFormatError``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from grants_ingest.core.exceptions import DateFormatError
from grants_ingest.core.logger import get_logger

log = get_logger(__name__)

TARGET_FORMAT = "YYYY-MM-DD"
DEFAULT_DATE_FORMATS: tuple[str, ...] = ("YYYY-MM-DD", "MMDDYYYY")


@dataclass(frozen=True, slots=True)
class DateFormat:
    """A named strict matcher yielding (year, month, day)."""

    name: str
    pattern: re.Pattern[str]

    def parse(self, value: str) -> date | None:
        match = self.pattern.fullmatch(value)
        if match is None:
            return None
        try:
            return date(int(match["year"]), int(match["month"]), int(match["day"]))
        except ValueError:
            return None


DATE_FORMATS: dict[str, DateFormat] = {
    fmt.name: fmt
    for fmt in (
        DateFormat("YYYY-MM-DD", re.compile(r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})", re.ASCII)),
        DateFormat("MMDDYYYY", re.compile(r"(?P<month>\d{2})(?P<day>\d{2})(?P<year>\d{4})", re.ASCII)),
        DateFormat("YYYYMMDD", re.compile(r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})", re.ASCII)),
        DateFormat("MM/DD/YYYY", re.compile(r"(?P<month>\d{2})/(?P<day>\d{2})/(?P<year>\d{4})", re.ASCII)),
    )
}


def validate_format_names(formats: Sequence[str]) -> tuple[str, ...]:
    """Return ``formats`` as a tuple, rejecting empty lists and unknown names."""
    if not formats:
        raise ValueError("at least one date format is required")
    unknown = [name for name in formats if name not in DATE_FORMATS]
    if unknown:
        raise ValueError(
            f"unknown date format(s) {unknown}; expected any of {sorted(DATE_FORMATS)}"
        )
    return tuple(formats)


def normalize_date_string(value: object, formats: Sequence[str] = DEFAULT_DATE_FORMATS) -> str:
    """Render ``value`` as ``YYYY-MM-DD`` using the first format that parses it."""
    formats = validate_format_names(formats)
    this_log = log.bind(target=TARGET_FORMAT, formats=list(formats), input=value)

    if isinstance(value, str):
        for name in formats:
            parsed = DATE_FORMATS[name].parse(value)
            if parsed is None:
                this_log.debug("date_format_not_matched", attempted_format=name)
                continue
            result = parsed.isoformat()
            this_log.info(
                "date_string_normalized" if result != value else "date_string_already_normalized",
                input_format=name,
            )
            return result

    this_log.warning("date_string_unparseable")
    raise DateFormatError(value, formats)
