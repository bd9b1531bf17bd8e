"""Process entrypoint for the grants-ingest queue consumer.

Usage:
    grants-ingest-consumer
    python -m grants_ingest.main
"""

from __future__ import annotations

import asyncio
import sys

from pydantic import ValidationError

from grants_ingest.core.config import AppSettings
from grants_ingest.core.exceptions import GrantsIngestError
from grants_ingest.core.logger import configure_logging, get_logger
from grants_ingest.persistence import create_persistence
from grants_ingest.processing.batch import BatchProcessor
from grants_ingest.processing.consumer import GrantsConsumer
from grants_ingest.queue import create_queue_client

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CONFIG = 2

log = get_logger(__name__)


async def run_consumer(settings: AppSettings) -> int:
    """Wire the pipeline from settings and poll until shutdown."""
    store = create_persistence(settings)
    queue = create_queue_client(settings)
    consumer = GrantsConsumer(
        queue=queue,
        processor=BatchProcessor(
            store=store,
            queue=queue,
            date_formats=settings.normalizer.date_formats,
        ),
    )
    consumer.install_signal_handlers()
    try:
        await store.connect()
        return await consumer.run()
    finally:
        await store.close()


def main() -> int:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        configure_logging()
        log.error("invalid_configuration", error=str(exc))
        return EXIT_CONFIG

    configure_logging(settings.log_level, settings.log_format)
    missing = [
        name
        for name, value in (
            ("GRANTS_INGEST_SQS_QUEUE_URL", settings.sqs.queue_url),
            ("GRANTS_INGEST_DB_DSN", settings.database.dsn),
        )
        if not value
    ]
    if missing:
        log.error("invalid_configuration", missing=missing)
        return EXIT_CONFIG

    try:
        asyncio.run(run_consumer(settings))
    except GrantsIngestError:
        log.exception("consumer_terminated")
        return EXIT_FATAL
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
