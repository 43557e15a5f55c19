"""Ordering and filtering of tracked messages for presentation."""

from __future__ import annotations

from followup_tracker.core.models import (
    MessageStatus,
    PriorityTier,
    TrackedMessage,
    TrackedState,
    TrackedView,
    ViewFilter,
)

_PRIORITY_ORDER: dict[PriorityTier, int] = {
    PriorityTier.HIGH: 0,
    PriorityTier.MEDIUM: 1,
    PriorityTier.LOW: 2,
}

_TIER_FILTERS: dict[ViewFilter, PriorityTier] = {
    ViewFilter.HIGH: PriorityTier.HIGH,
    ViewFilter.MEDIUM: PriorityTier.MEDIUM,
    ViewFilter.LOW: PriorityTier.LOW,
}


def build_view(state: TrackedState, filter_key: ViewFilter = ViewFilter.ALL) -> TrackedView:
    """Return active messages matching ``filter_key``, most urgent first.

    Completed messages never appear. Within a tier, newer messages come first.
    ``state`` is not modified.
    """
    active = [m for m in state.messages if m.status is not MessageStatus.COMPLETED]
    filtered = [m for m in active if _matches(m, filter_key)]
    ordered = sorted(filtered, key=lambda m: m.received_at, reverse=True)
    ordered.sort(key=lambda m: _PRIORITY_ORDER[m.priority])

    return TrackedView(
        filter_key=filter_key,
        messages=tuple(ordered),
        total_count=len(state.messages),
        pending_count=sum(
            1 for m in state.messages if m.status is MessageStatus.PENDING
        ),
        high_priority_count=sum(
            1 for m in ordered if m.priority is PriorityTier.HIGH
        ),
    )


def _matches(message: TrackedMessage, filter_key: ViewFilter) -> bool:
    if filter_key is ViewFilter.ALL:
        return True
    if filter_key is ViewFilter.PENDING:
        return message.status is MessageStatus.PENDING
    return message.priority is _TIER_FILTERS[filter_key]


__all__ = ["build_view"]
