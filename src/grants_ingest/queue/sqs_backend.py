"""SQS backend implementing IQueueClient.

boto3 is blocking, so every call runs on a worker thread to keep the event
loop free while a long-poll is outstanding.
"""

from __future__ import annotations

import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from grants_ingest.core.exceptions import TransportError
from grants_ingest.core.logger import get_logger
from grants_ingest.core.types import QueueUrl, ReceiptHandle
from grants_ingest.models.message import QueueMessage

log = get_logger(__name__)

MAX_BATCH_SIZE = 10
LONG_POLL_WAIT_SECONDS = 20


class SQSQueueClient:
    """Production IQueueClient backed by SQS."""

    def __init__(self, queue_url: QueueUrl, region: str = "us-east-1",
                 endpoint_url: str | None = None,
                 wait_time_seconds: int = LONG_POLL_WAIT_SECONDS,
                 max_messages: int = MAX_BATCH_SIZE) -> None:
        self._queue_url = queue_url
        self._wait_time_seconds = wait_time_seconds
        self._max_messages = max_messages
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("sqs", **kwargs)

    @property
    def queue_url(self) -> str:
        return self._queue_url

    def _receive(self) -> list[QueueMessage]:
        try:
            resp = self._client.receive_message(
                QueueUrl=self._queue_url,
                WaitTimeSeconds=self._wait_time_seconds,
                MaxNumberOfMessages=self._max_messages,
            )
        except (BotoCoreError, ClientError) as exc:
            raise TransportError(f"SQS receive failed for {self._queue_url!r}: {exc}") from exc
        return [QueueMessage.from_sqs(raw) for raw in resp.get("Messages", [])]

    def _delete(self, receipt_handle: ReceiptHandle) -> None:
        try:
            self._client.delete_message(QueueUrl=self._queue_url, ReceiptHandle=receipt_handle)
        except (BotoCoreError, ClientError) as exc:
            raise TransportError(f"SQS delete failed for {self._queue_url!r}: {exc}") from exc

    async def receive_batch(self) -> list[QueueMessage]:
        """Long-poll for up to ``max_messages`` messages."""
        messages = await asyncio.to_thread(self._receive)
        if not messages:
            log.info("empty_message_batch_received", queue_url=self._queue_url)
        return messages

    async def delete_message(self, receipt_handle: ReceiptHandle) -> None:
        await asyncio.to_thread(self._delete, receipt_handle)
