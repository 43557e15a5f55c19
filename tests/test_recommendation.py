"""Tests for suggested next actions."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from followup_tracker.core.models import (
    Importance,
    MessageStatus,
    PriorityTier,
    TrackedMessage,
)
from followup_tracker.intelligence.recommendation import (
    DEFAULT_RECOMMENDATION,
    recommend_action,
)

NOW = datetime(2025, 10, 26, 12, 0, tzinfo=timezone.utc)


def _message(body: str, subject: str = "Hello") -> TrackedMessage:
    return TrackedMessage(
        id="msg-1",
        subject=subject,
        sender="Alice",
        sender_address="alice@example.com",
        received_at=NOW,
        has_attachments=False,
        importance=Importance.HIGH,
        is_flagged=True,
        is_read=False,
        body=body,
        priority=PriorityTier.HIGH,
        status=MessageStatus.PENDING,
        last_updated=NOW,
    )


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("Please REVIEW the doc", "Review the content and provide feedback"),
        ("Any feedback?", "Review the content and provide feedback"),
        ("Can you approve this?", "Review and approve the request"),
        ("Team meeting at 3", "Confirm your attendance or reschedule"),
        ("The deadline is Friday", "Check deadline and take necessary action"),
        ("Lunch?", DEFAULT_RECOMMENDATION),
        ("", DEFAULT_RECOMMENDATION),
    ],
)
def test_recommendation_rules(body: str, expected: str) -> None:
    assert recommend_action(_message(body)) == expected


def test_first_matching_rule_wins() -> None:
    message = _message("Before the meeting, approve and review the deadline plan")

    assert recommend_action(message) == "Review the content and provide feedback"


def test_subject_is_ignored() -> None:
    assert recommend_action(_message("", subject="Meeting")) == DEFAULT_RECOMMENDATION
