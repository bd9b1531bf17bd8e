"""Type aliases used across grants-ingest."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
GrantId = str
MessageId = str
ReceiptHandle = str
QueueUrl = str
