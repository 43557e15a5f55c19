"""Ingestion pipeline components."""

from .fetcher import MessageIngestor
from .normalizer import RecordNormalizer, synthesize_message_id
from .sources import (
    HttpMailboxSource,
    JsonFileMailboxSource,
    SampleMailboxSource,
    build_mailbox_source,
)

__all__ = [
    "HttpMailboxSource",
    "JsonFileMailboxSource",
    "MessageIngestor",
    "RecordNormalizer",
    "SampleMailboxSource",
    "build_mailbox_source",
    "synthesize_message_id",
]
