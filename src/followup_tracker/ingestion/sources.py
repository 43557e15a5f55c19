"""Mailbox sources supplying raw message records."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import httpx

from ..core.config import MailboxSettings
from ..core.datetime_utils import serialize_datetime, utc_now
from ..core.interfaces import MailboxError, MailboxSource, RawMessage

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SampleMailboxSource:
    """Demo records used when no real mailbox is configured."""

    now: datetime | None = None

    def fetch_messages(self) -> Sequence[RawMessage]:
        """Return two representative follow-up candidates."""
        now = self.now or utc_now()
        return [
            {
                "id": "sample-status-update",
                "subject": "Project Status Update - Waiting for Feedback",
                "from": "john.doe@company.com",
                "sender": "John Doe",
                "receivedTime": serialize_datetime(now - timedelta(days=3)),
                "hasAttachments": True,
                "importance": "high",
                "isRead": True,
                "isFlagged": True,
                "body": (
                    "Please review the attached proposal and provide feedback by EOW"
                ),
            },
            {
                "id": "sample-meeting-notes",
                "subject": "Meeting Notes - Action Items Required",
                "from": "jane.smith@company.com",
                "sender": "Jane Smith",
                "receivedTime": serialize_datetime(now - timedelta(days=1)),
                "hasAttachments": False,
                "importance": "high",
                "isRead": True,
                "isFlagged": False,
                "body": "Need to complete the following items from our discussion",
            },
        ]


@dataclass(slots=True)
class JsonFileMailboxSource:
    """Read raw records from a JSON file on disk."""

    path: Path

    def fetch_messages(self) -> Sequence[RawMessage]:
        """Load the file and return its message records."""
        try:
            payload = json.loads(Path(self.path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise MailboxError(f"Unable to read mailbox file {self.path}") from exc
        except json.JSONDecodeError as exc:
            raise MailboxError(f"Mailbox file {self.path} is not valid JSON") from exc
        return _extract_records(payload)


@dataclass(slots=True)
class HttpMailboxSource:
    """Fetch raw records from a JSON HTTP endpoint."""

    settings: MailboxSettings

    def fetch_messages(self) -> Sequence[RawMessage]:
        """GET the configured endpoint and return its message records."""
        if not self.settings.url:
            raise MailboxError("Mailbox URL is not configured")
        try:
            response = httpx.get(
                self.settings.url, timeout=self.settings.timeout_seconds
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise MailboxError(f"Mailbox request failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise MailboxError("Mailbox returned invalid JSON") from exc
        return _extract_records(payload)


def build_mailbox_source(settings: MailboxSettings) -> MailboxSource:
    """Return the mailbox source selected by ``settings.source``."""
    if settings.source == "file":
        if settings.path is None:
            raise MailboxError("Mailbox path is required for the file source")
        return JsonFileMailboxSource(settings.path)
    if settings.source == "http":
        return HttpMailboxSource(settings)
    return SampleMailboxSource()


def _extract_records(payload: Any) -> list[RawMessage]:
    """Accept either a bare array or an object with a ``value`` array."""
    if isinstance(payload, dict):
        payload = payload.get("value")
    if not isinstance(payload, list):
        raise MailboxError("Mailbox payload must be a list of messages")
    LOGGER.debug("Mailbox returned %d record(s)", len(payload))
    return payload


__all__ = [
    "HttpMailboxSource",
    "JsonFileMailboxSource",
    "SampleMailboxSource",
    "build_mailbox_source",
]
