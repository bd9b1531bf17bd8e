"""Polling loop that drains the grants-ingest queue until told to stop."""

from __future__ import annotations

import asyncio
import signal

from grants_ingest.core.logger import get_logger
from grants_ingest.core.protocols import IQueueClient
from grants_ingest.processing.batch import BatchProcessor

log = get_logger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class GrantsConsumer:
    """Long-polls the queue and hands each non-empty batch to the processor.

    Shutdown is cooperative: ``request_shutdown`` only sets a flag, which is
    checked before each poll, so a batch in flight always runs to the end.
    Errors escalated by the processor propagate out of ``run``.
    """

    def __init__(self, *, queue: IQueueClient, processor: BatchProcessor) -> None:
        self._queue = queue
        self._processor = processor
        self._shutdown_requested = False
        self._log = log.bind(queue_url=queue.queue_url)

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    def request_shutdown(self, signame: str = "manual") -> None:
        self._log.info("shutdown_requested", signal=signame)
        self._shutdown_requested = True

    def install_signal_handlers(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Route SIGINT/SIGTERM to ``request_shutdown`` on the running loop."""
        loop = loop or asyncio.get_running_loop()
        for sig in SHUTDOWN_SIGNALS:
            loop.add_signal_handler(sig, self.request_shutdown, sig.name)

    async def run(self) -> int:
        """Poll until shutdown is requested; returns the number of batches processed."""
        batches = 0
        while not self._shutdown_requested:
            self._log.info("polling_next_batch")
            messages = await self._queue.receive_batch()
            if messages:
                await self._processor.process_batch(messages)
                batches += 1
        self._log.info("shutting_down", batches=batches)
        return batches
