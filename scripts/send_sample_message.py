"""Create the grants-ingest queue and publish sample opportunity messages.

Usage:
    python scripts/send_sample_message.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import boto3

DEFAULT_QUEUE_NAME = "grants-ingest-events"
SAMPLE_PATH = Path(__file__).resolve().parent.parent / "config" / "sample_opportunities.json"


def create_queue(sqs: Any, name: str = DEFAULT_QUEUE_NAME) -> str:
    """Create the queue if it does not exist. Returns its URL."""
    existing = sqs.list_queues(QueueNamePrefix=name).get("QueueUrls", [])
    for url in existing:
        if url.rsplit("/", 1)[-1] == name:
            print(f"  Queue {name} already exists, skipping")
            return url
    url = sqs.create_queue(QueueName=name)["QueueUrl"]
    print(f"  Created queue {name}")
    return url


def load_sample_opportunities(path: Path = SAMPLE_PATH) -> list[dict[str, Any]]:
    return json.loads(path.read_text())["opportunities"]


def send_sample_messages(sqs: Any, queue_url: str,
                         opportunities: list[dict[str, Any]] | None = None) -> list[str]:
    """Publish each opportunity as one message. Returns the message ids."""
    if opportunities is None:
        opportunities = load_sample_opportunities()

    message_ids = []
    for opportunity in opportunities:
        resp = sqs.send_message(QueueUrl=queue_url, MessageBody=json.dumps(opportunity))
        message_ids.append(resp["MessageId"])
    print(f"  Sent {len(message_ids)} opportunity messages")
    return message_ids


def main() -> None:
    parser = argparse.ArgumentParser(description="Publish sample grants-ingest messages to SQS")
    parser.add_argument("--endpoint-url", default=None, help="SQS endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--queue-name", default=DEFAULT_QUEUE_NAME, help="Queue name")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--file", type=Path, default=SAMPLE_PATH, help="JSON file of opportunities")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    sqs = boto3.client("sqs", **kwargs)

    print("Creating queue...")
    queue_url = create_queue(sqs, args.queue_name)

    print("Sending messages...")
    send_sample_messages(sqs, queue_url, load_sample_opportunities(args.file))

    print(f"Done! Set GRANTS_INGEST_SQS_QUEUE_URL={queue_url}")


if __name__ == "__main__":
    main()
