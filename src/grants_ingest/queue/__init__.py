"""Work queue clients behind the IQueueClient protocol."""

from __future__ import annotations

from grants_ingest.core.config import AppSettings
from grants_ingest.queue.sqs_backend import SQSQueueClient


def create_queue_client(settings: AppSettings | None = None) -> SQSQueueClient:
    """Create the SQS queue client from application settings."""
    if settings is None:
        settings = AppSettings()

    return SQSQueueClient(
        queue_url=settings.sqs.queue_url,
        region=settings.sqs.region,
        endpoint_url=settings.sqs.endpoint_url,
        wait_time_seconds=settings.sqs.wait_time_seconds,
        max_messages=settings.sqs.max_messages,
    )
