"""Normalise raw mailbox records into tracked messages."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ..core.config import ScoringSettings
from ..core.datetime_utils import parse_datetime_lenient
from ..core.models import (
    Importance,
    LearningWeights,
    MessageStatus,
    PriorityTier,
    TrackedMessage,
)
from ..intelligence.priority import score_message

LOGGER = logging.getLogger(__name__)


class RecordNormalizer:
    """Convert loosely-typed mailbox records into :class:`TrackedMessage`."""

    def __init__(self, settings: ScoringSettings | None = None) -> None:
        """Store the scoring settings applied to every normalised record."""
        self._settings = settings or ScoringSettings()

    def normalize(
        self,
        raw: Mapping[str, Any],
        *,
        now: datetime,
        weights: LearningWeights,
    ) -> TrackedMessage:
        """Build a pending, freshly scored message from ``raw``."""
        sender_address = _text(raw.get("from")) or _text(raw.get("sender"))
        sender = _text(raw.get("sender")) or _first_token(_text(raw.get("from")))
        subject = _text(raw.get("subject"))
        body = _text(raw.get("body")) or _text(raw.get("bodyPreview"))

        raw_received = raw.get("receivedTime")
        received_at = parse_datetime_lenient(raw_received, default=now)
        if raw_received and received_at is now:
            LOGGER.warning(
                "Unparseable receivedTime %r for %r; treating as now",
                raw_received,
                subject,
            )

        message_id = _text(raw.get("id")) or synthesize_message_id(
            subject, sender_address, _text(raw_received), body
        )
        importance = (
            Importance.HIGH
            if _text(raw.get("importance")).lower() == Importance.HIGH
            else Importance.NORMAL
        )

        message = TrackedMessage(
            id=message_id,
            subject=subject,
            sender=sender,
            sender_address=sender_address,
            received_at=received_at,
            has_attachments=bool(raw.get("hasAttachments")),
            importance=importance,
            is_flagged=bool(raw.get("isFlagged")),
            is_read=bool(raw.get("isRead")),
            body=body,
            priority=PriorityTier.LOW,
            status=MessageStatus.PENDING,
            last_updated=now,
        )
        message.priority = score_message(message, weights, now, self._settings)
        return message


def synthesize_message_id(
    subject: str, sender_address: str, received: str, body: str
) -> str:
    """Return a stable id derived from the message content."""
    digest = hashlib.sha256(
        "\x1f".join((subject, sender_address, received, body)).encode("utf-8")
    ).hexdigest()
    return f"msg-{digest[:16]}"


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _first_token(value: str) -> str:
    parts = value.split()
    return parts[0] if parts else ""


__all__ = ["RecordNormalizer", "synthesize_message_id"]
