"""Follow-up tracking service tying scoring, learning, and storage together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from threading import Lock

from .core.config import AppSettings
from .core.datetime_utils import utc_now
from .core.interfaces import MailboxError, MailboxSource, SnapshotStore
from .core.models import (
    ActionKind,
    ActionOutcome,
    ClearOutcome,
    LearningWeights,
    RefreshOutcome,
    TrackedState,
    TrackedView,
    ViewFilter,
)
from .ingestion import MessageIngestor, RecordNormalizer
from .intelligence import apply_action, build_view

LOGGER = logging.getLogger(__name__)

FETCH_FAILURE_MESSAGE = (
    "Unable to access inbox. Please ensure proper permissions are granted."
)
CLEAR_CONFIRMATION_REQUIRED = (
    "Are you sure? This will clear all tracked emails and learning data."
)

Clock = Callable[[], datetime]


class FollowUpTracker:
    """Own the tracked state for one session and expose the user operations.

    Every operation takes the same lock so the message list, the action log
    and the weight table are always read and written together.
    """

    def __init__(
        self,
        store: SnapshotStore,
        source: MailboxSource,
        settings: AppSettings | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        """Load the persisted snapshot or start from empty defaults."""
        self._store = store
        self._source = source
        self._settings = settings or AppSettings()
        self._clock = clock or utc_now
        self._ingestor = MessageIngestor(RecordNormalizer(self._settings.scoring))
        self._lock = Lock()
        loaded = store.load()
        self._state = loaded if loaded is not None else self._empty_state()
        LOGGER.info(
            "Tracker initialised with %d tracked message(s)", len(self._state.messages)
        )

    @property
    def state(self) -> TrackedState:
        """Return the live aggregate."""
        return self._state

    def refresh(self) -> RefreshOutcome:
        """Fetch new messages, score them and persist the snapshot."""
        try:
            records = self._source.fetch_messages()
        except MailboxError as exc:
            LOGGER.warning("Mailbox fetch failed: %s", exc)
            return RefreshOutcome(success=False, message=FETCH_FAILURE_MESSAGE)

        with self._lock:
            ingested = self._ingestor.ingest(self._state, records, now=self._clock())
            self._store.save(self._state)
        return RefreshOutcome(
            success=True,
            message=f"Tracked {ingested} message(s).",
            ingested=ingested,
        )

    def mark_action(self, message_id: str, action: ActionKind) -> ActionOutcome:
        """Apply a user action and persist the snapshot when it took effect."""
        with self._lock:
            outcome = apply_action(
                self._state,
                message_id,
                action,
                self._clock(),
                self._settings.learning,
            )
            if outcome is ActionOutcome.APPLIED:
                self._store.save(self._state)
        return outcome

    def view(self, filter_key: ViewFilter = ViewFilter.ALL) -> TrackedView:
        """Return the ordered, filtered view of active messages."""
        with self._lock:
            return build_view(self._state, filter_key)

    def now(self) -> datetime:
        """Return the tracker's notion of the current instant."""
        return self._clock()

    def clear_all(self, *, confirm: bool) -> ClearOutcome:
        """Wipe tracked messages, history and learned weights when confirmed."""
        if not confirm:
            return ClearOutcome(success=False, message=CLEAR_CONFIRMATION_REQUIRED)
        with self._lock:
            self._state = self._empty_state()
            self._store.clear()
        LOGGER.info("Tracked state cleared")
        return ClearOutcome(
            success=True, message="Data cleared. Refresh to start fresh."
        )

    def _empty_state(self) -> TrackedState:
        return TrackedState(
            learning_weights=LearningWeights(
                time_decay=self._settings.learning.time_decay
            )
        )


__all__ = [
    "CLEAR_CONFIRMATION_REQUIRED",
    "FETCH_FAILURE_MESSAGE",
    "FollowUpTracker",
]
