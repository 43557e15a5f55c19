"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from followup_tracker.core.models import (
    ActionKind,
    ActionRecord,
    GlobalActionRecord,
    Importance,
    LearningWeights,
    MessageStatus,
    PriorityTier,
    TrackedMessage,
    TrackedState,
)

SNAPSHOT_NOW = datetime(2025, 10, 26, 12, 0, 30, 123000, tzinfo=timezone.utc)


@pytest.fixture
def sample_state() -> TrackedState:
    """Two messages, two logged actions, and two sender weights."""
    first = TrackedMessage(
        id="msg-1",
        subject="Status update",
        sender="John Doe",
        sender_address="john.doe@company.com",
        received_at=SNAPSHOT_NOW - timedelta(days=3),
        has_attachments=True,
        importance=Importance.HIGH,
        is_flagged=True,
        is_read=True,
        body="Please review the attached proposal",
        priority=PriorityTier.HIGH,
        status=MessageStatus.PENDING,
        last_updated=SNAPSHOT_NOW,
        action_history=[ActionRecord(action=ActionKind.SNOOZE, timestamp=SNAPSHOT_NOW)],
    )
    second = TrackedMessage(
        id="msg-2",
        subject="Lunch",
        sender="Jane Smith",
        sender_address="jane.smith@company.com",
        received_at=SNAPSHOT_NOW - timedelta(hours=2),
        has_attachments=False,
        importance=Importance.NORMAL,
        is_flagged=False,
        is_read=False,
        body="",
        priority=PriorityTier.LOW,
        status=MessageStatus.COMPLETED,
        last_updated=SNAPSHOT_NOW,
        action_history=[
            ActionRecord(action=ActionKind.COMPLETED, timestamp=SNAPSHOT_NOW)
        ],
    )
    return TrackedState(
        messages=[first, second],
        actions=[
            GlobalActionRecord(
                message_id="msg-1", action=ActionKind.SNOOZE, timestamp=SNAPSHOT_NOW
            ),
            GlobalActionRecord(
                message_id="msg-2", action=ActionKind.COMPLETED, timestamp=SNAPSHOT_NOW
            ),
        ],
        learning_weights=LearningWeights(
            sender={"john doe": -3.0, "jane smith": 5.0}, time_decay=0.1
        ),
    )
