"""grants-ingest exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence


class GrantsIngestError(Exception):
    """Base exception for all grants-ingest errors."""


class ParseError(GrantsIngestError):
    """Message payload could not be turned into a grant record."""


class DateFormatError(ParseError):
    """Date value matched none of the candidate input formats."""

    def __init__(self, value: object, formats: Sequence[str]) -> None:
        self.value = value
        self.formats = list(formats)
        super().__init__(
            f"Value {value!r} could not be parsed from formats {', '.join(self.formats)}"
        )


class PersistenceError(GrantsIngestError):
    """Grant store write failed."""


class TransportError(GrantsIngestError):
    """Queue receive or delete call failed."""
