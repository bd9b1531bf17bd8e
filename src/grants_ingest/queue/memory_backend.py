"""In-memory queue for unit tests: list-backed fake of SQS semantics."""

from __future__ import annotations

import itertools

from grants_ingest.core.exceptions import TransportError
from grants_ingest.core.types import ReceiptHandle
from grants_ingest.models.message import QueueMessage


class MemoryQueueClient:
    """List-backed IQueueClient for unit tests.

    Received messages stay in flight (invisible) until deleted or until
    ``expire_visibility()`` returns them to the queue, as a visibility
    timeout would.
    """

    def __init__(self, queue_url: str = "memory://grants-ingest", max_messages: int = 10) -> None:
        self._queue_url = queue_url
        self._max_messages = max_messages
        self._ids = itertools.count(1)
        self._visible: list[tuple[str, str]] = []
        self._in_flight: dict[ReceiptHandle, tuple[str, str]] = {}
        self.deleted: list[ReceiptHandle] = []
        self.delete_error: Exception | None = None
        self.receive_error: Exception | None = None
        self.receive_calls = 0

    @property
    def queue_url(self) -> str:
        return self._queue_url

    def send(self, body: str) -> str:
        """Enqueue a message body; returns its message id."""
        message_id = f"msg-{next(self._ids)}"
        self._visible.append((message_id, body))
        return message_id

    def pending(self) -> int:
        """Messages not yet deleted, visible or in flight."""
        return len(self._visible) + len(self._in_flight)

    def expire_visibility(self) -> None:
        self._visible.extend(self._in_flight.values())
        self._in_flight.clear()

    async def receive_batch(self) -> list[QueueMessage]:
        self.receive_calls += 1
        if self.receive_error is not None:
            raise self.receive_error
        batch, self._visible = self._visible[: self._max_messages], self._visible[self._max_messages:]
        messages = []
        for message_id, body in batch:
            handle = f"rh-{message_id}-{next(self._ids)}"
            self._in_flight[handle] = (message_id, body)
            messages.append(QueueMessage(message_id=message_id, body=body, receipt_handle=handle))
        return messages

    async def delete_message(self, receipt_handle: ReceiptHandle) -> None:
        if self.delete_error is not None:
            raise self.delete_error
        if self._in_flight.pop(receipt_handle, None) is None:
            raise TransportError(f"Unknown receipt handle {receipt_handle!r}")
        self.deleted.append(receipt_handle)
