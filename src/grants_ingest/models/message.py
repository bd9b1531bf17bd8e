"""Queue message envelope and per-batch processing state models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from grants_ingest.core.types import MessageId


class MessageState(StrEnum):
    RECEIVED = "received"
    NORMALIZED = "normalized"
    PERSISTED = "persisted"
    ACKNOWLEDGED = "acknowledged"
    PARSE_FAILED = "parse_failed"
    PERSIST_FAILED = "persist_failed"


class QueueMessage(BaseModel):
    """A message borrowed from the queue until it is deleted."""

    message_id: str
    body: str
    receipt_handle: str

    model_config = {"frozen": True}

    @classmethod
    def from_sqs(cls, raw: dict[str, Any]) -> QueueMessage:
        """Build from an SQS ``ReceiveMessage`` entry."""
        return cls(
            message_id=raw["MessageId"],
            body=raw.get("Body", ""),
            receipt_handle=raw["ReceiptHandle"],
        )


class BatchTotals(BaseModel):
    """Outcome counts for one received batch."""

    success: int = 0
    parse_errors: int = 0
    save_errors: int = 0
    states: dict[MessageId, MessageState] = Field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return self.parse_errors + self.save_errors > 0

    def record(self, message_id: MessageId, state: MessageState) -> None:
        """Count a message that reached a terminal state."""
        self.states[message_id] = state
        if state is MessageState.ACKNOWLEDGED:
            self.success += 1
        elif state is MessageState.PARSE_FAILED:
            self.parse_errors += 1
        elif state is MessageState.PERSIST_FAILED:
            self.save_errors += 1
