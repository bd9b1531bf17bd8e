"""grants-ingest: SQS consumer that upserts grant opportunities into Postgres."""

__version__ = "0.1.0"
