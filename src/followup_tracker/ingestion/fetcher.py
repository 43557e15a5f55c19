"""Merge freshly fetched mailbox records into the tracked state."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from ..core.models import TrackedMessage, TrackedState
from .normalizer import RecordNormalizer

LOGGER = logging.getLogger(__name__)


class MessageIngestor:
    """Upsert normalised records into a :class:`TrackedState`."""

    def __init__(self, normalizer: RecordNormalizer | None = None) -> None:
        """Initialise the ingestor with the normaliser used for each record."""
        self._normalizer = normalizer or RecordNormalizer()

    def ingest(
        self,
        state: TrackedState,
        records: Iterable[Mapping[str, Any]],
        *,
        now: datetime,
    ) -> int:
        """Add or refresh every record and return how many were ingested.

        A record whose id is already tracked keeps its status and action
        history; its content, priority and ``last_updated`` are replaced.
        """
        positions = {message.id: index for index, message in enumerate(state.messages)}
        ingested = 0
        skipped = 0

        for raw in records:
            if not isinstance(raw, Mapping):
                LOGGER.warning("Skipping non-object mailbox record: %r", raw)
                skipped += 1
                continue

            message = self._normalizer.normalize(
                raw, now=now, weights=state.learning_weights
            )
            index = positions.get(message.id)
            if index is None:
                positions[message.id] = len(state.messages)
                state.messages.append(message)
            else:
                state.messages[index] = _carry_over(state.messages[index], message)
            ingested += 1

        LOGGER.info(
            "Ingest completed: ingested=%s, skipped=%s, tracked=%s",
            ingested,
            skipped,
            len(state.messages),
        )
        return ingested


def _carry_over(existing: TrackedMessage, fresh: TrackedMessage) -> TrackedMessage:
    fresh.status = existing.status
    fresh.action_history = existing.action_history
    return fresh


__all__ = ["MessageIngestor"]
