"""Tests for ordering and filtering tracked messages."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from followup_tracker.core.models import (
    Importance,
    MessageStatus,
    PriorityTier,
    TrackedMessage,
    TrackedState,
    ViewFilter,
)
from followup_tracker.intelligence.ranking import build_view

NOW = datetime(2025, 10, 26, 12, 0, tzinfo=timezone.utc)


def _message(
    message_id: str,
    priority: PriorityTier,
    hours_old: int,
    status: MessageStatus = MessageStatus.PENDING,
) -> TrackedMessage:
    received = NOW - timedelta(hours=hours_old)
    return TrackedMessage(
        id=message_id,
        subject=f"Subject {message_id}",
        sender="Sender",
        sender_address="sender@example.com",
        received_at=received,
        has_attachments=False,
        importance=Importance.NORMAL,
        is_flagged=False,
        is_read=False,
        body="",
        priority=priority,
        status=status,
        last_updated=received,
    )


def _state() -> TrackedState:
    return TrackedState(
        messages=[
            _message("low-new", PriorityTier.LOW, 1),
            _message("high-old", PriorityTier.HIGH, 48),
            _message("medium-replied", PriorityTier.MEDIUM, 5, MessageStatus.REPLIED),
            _message("high-new", PriorityTier.HIGH, 2),
            _message("high-done", PriorityTier.HIGH, 3, MessageStatus.COMPLETED),
            _message("medium-old", PriorityTier.MEDIUM, 30),
        ]
    )


def _ids(state: TrackedState, filter_key: ViewFilter) -> list[str]:
    return [message.id for message in build_view(state, filter_key).messages]


def test_all_filter_orders_by_tier_then_recency() -> None:
    assert _ids(_state(), ViewFilter.ALL) == [
        "high-new",
        "high-old",
        "medium-replied",
        "medium-old",
        "low-new",
    ]


def test_pending_filter_returns_only_pending_sorted() -> None:
    view = build_view(_state(), ViewFilter.PENDING)

    assert [message.id for message in view.messages] == [
        "high-new",
        "high-old",
        "medium-old",
        "low-new",
    ]
    assert all(message.status is MessageStatus.PENDING for message in view.messages)


def test_tier_filters_exclude_completed() -> None:
    assert _ids(_state(), ViewFilter.HIGH) == ["high-new", "high-old"]
    assert _ids(_state(), ViewFilter.MEDIUM) == ["medium-replied", "medium-old"]
    assert _ids(_state(), ViewFilter.LOW) == ["low-new"]


def test_counts_cover_store_and_filtered_set() -> None:
    view = build_view(_state(), ViewFilter.MEDIUM)

    assert view.total_count == 6
    assert view.pending_count == 4
    assert view.high_priority_count == 0

    all_view = build_view(_state(), ViewFilter.ALL)
    assert all_view.high_priority_count == 2


def test_view_does_not_mutate_state() -> None:
    state = _state()
    original_order = [message.id for message in state.messages]

    build_view(state, ViewFilter.ALL)

    assert [message.id for message in state.messages] == original_order


def test_empty_state_produces_empty_view() -> None:
    view = build_view(TrackedState())

    assert view.messages == ()
    assert view.total_count == 0
    assert view.filter_key is ViewFilter.ALL
