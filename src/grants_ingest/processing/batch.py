"""Batch processor: normalize, persist, then acknowledge each queue message.

Parse and save failures are contained: they are logged, counted, and the
message is left on the queue for redrive. A failure to delete an already
persisted message is escalated to the caller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from grants_ingest.core.exceptions import ParseError, PersistenceError, TransportError
from grants_ingest.core.logger import get_logger
from grants_ingest.core.protocols import IGrantStore, IQueueClient
from grants_ingest.models.message import BatchTotals, MessageState, QueueMessage
from grants_ingest.normalize.dates import DEFAULT_DATE_FORMATS
from grants_ingest.normalize.grants import message_to_grant

log = get_logger(__name__)


class BatchProcessor:
    """Runs every message of a received batch through the ingest pipeline."""

    def __init__(self, *, store: IGrantStore, queue: IQueueClient,
                 date_formats: Sequence[str] = DEFAULT_DATE_FORMATS) -> None:
        self._store = store
        self._queue = queue
        self._date_formats = tuple(date_formats)

    async def process_message(self, message: QueueMessage) -> MessageState:
        """Take one message from ``received`` to a terminal state.

        Raises:
            TransportError: the grant was saved but the message could not be
                deleted.
        """
        this_log = log.bind(message_id=message.message_id, receipt_handle=message.receipt_handle)
        this_log.info("processing_message", body=message.body)

        try:
            grant = message_to_grant(message.body, date_formats=self._date_formats)
        except ParseError as exc:
            this_log.error("grant_parse_failed", error=str(exc), error_type=type(exc).__name__)
            return MessageState.PARSE_FAILED
        this_log = this_log.bind(grant_id=grant.external_id)

        try:
            await self._store.upsert_grant(grant)
        except PersistenceError as exc:
            this_log.error("grant_upsert_failed", error=str(exc))
            return MessageState.PERSIST_FAILED

        try:
            await self._queue.delete_message(message.receipt_handle)
        except TransportError as exc:
            this_log.error("message_delete_failed", error=str(exc))
            raise

        this_log.info("message_processed")
        return MessageState.ACKNOWLEDGED

    async def process_batch(self, messages: Sequence[QueueMessage]) -> BatchTotals:
        """Process messages concurrently and report per-batch totals.

        Every message settles before this returns or raises; one message's
        failure never cancels its siblings. If any message escalated, the
        first ``TransportError`` (else the first unexpected exception) is
        re-raised once the batch has settled.
        """
        results = await asyncio.gather(
            *(self.process_message(message) for message in messages),
            return_exceptions=True,
        )

        totals = BatchTotals()
        escalated: list[BaseException] = []
        for message, result in zip(messages, results):
            if isinstance(result, BaseException):
                escalated.append(result)
            else:
                totals.record(message.message_id, result)

        if escalated:
            transport = [exc for exc in escalated if isinstance(exc, TransportError)]
            raise (transport or escalated)[0]

        summary = log.bind(
            with_errors=totals.has_errors,
            totals={
                "success": totals.success,
                "parse_errors": totals.parse_errors,
                "save_errors": totals.save_errors,
            },
        )
        if totals.has_errors:
            summary.warning("finished_processing_messages")
        else:
            summary.info("finished_processing_messages")
        return totals
