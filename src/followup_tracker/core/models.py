"""Core domain models used across the application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class Importance(StrEnum):
    """Importance level reported by the mailbox."""

    NORMAL = "normal"
    HIGH = "high"


class PriorityTier(StrEnum):
    """Output of the priority scorer."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MessageStatus(StrEnum):
    """Lifecycle status of a tracked message."""

    PENDING = "pending"
    REPLIED = "replied"
    FORWARDED = "forwarded"
    SNOOZED = "snoozed"
    COMPLETED = "completed"


class ActionKind(StrEnum):
    """Actions a user can take on a tracked message."""

    REPLIED = "replied"
    FORWARDED = "forwarded"
    COMPLETED = "completed"
    SNOOZE = "snooze"


class ViewFilter(StrEnum):
    """Filter keys accepted by the ranking view."""

    ALL = "all"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    PENDING = "pending"


class ActionOutcome(StrEnum):
    """Result of applying a user action to the tracked state."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class ActionRecord:
    """Single entry in a message's action history."""

    action: ActionKind
    timestamp: datetime


@dataclass(slots=True)
class GlobalActionRecord:
    """Audit trail entry referencing a message by id."""

    message_id: str
    action: ActionKind
    timestamp: datetime


# pylint: disable=too-many-instance-attributes
@dataclass(slots=True)
class TrackedMessage:
    """Message monitored for a follow-up action."""

    id: str
    subject: str
    sender: str
    sender_address: str
    received_at: datetime
    has_attachments: bool
    importance: Importance
    is_flagged: bool
    is_read: bool
    body: str
    priority: PriorityTier
    status: MessageStatus
    last_updated: datetime
    action_history: list[ActionRecord] = field(default_factory=list)


@dataclass(slots=True)
class LearningWeights:
    """Per-sender biases accumulated from user actions."""

    sender: dict[str, float] = field(default_factory=dict)
    keywords: dict[str, float] = field(default_factory=dict)
    time_decay: float = 0.1


@dataclass(slots=True)
class TrackedState:
    """Aggregate root holding everything persisted in a snapshot."""

    messages: list[TrackedMessage] = field(default_factory=list)
    actions: list[GlobalActionRecord] = field(default_factory=list)
    learning_weights: LearningWeights = field(default_factory=LearningWeights)

    def find_message(self, message_id: str) -> TrackedMessage | None:
        """Return the message with ``message_id`` if it is tracked."""
        for message in self.messages:
            if message.id == message_id:
                return message
        return None


@dataclass(frozen=True, slots=True)
class TrackedView:
    """Ordered, filtered messages plus the aggregate counters shown with them."""

    filter_key: ViewFilter
    messages: tuple[TrackedMessage, ...]
    total_count: int
    pending_count: int
    high_priority_count: int


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    """Result of a refresh request."""

    success: bool
    message: str
    ingested: int = 0


@dataclass(frozen=True, slots=True)
class ClearOutcome:
    """Result of a clear-all request."""

    success: bool
    message: str


__all__ = [
    "ActionKind",
    "ActionOutcome",
    "ActionRecord",
    "ClearOutcome",
    "GlobalActionRecord",
    "Importance",
    "LearningWeights",
    "MessageStatus",
    "PriorityTier",
    "RefreshOutcome",
    "TrackedMessage",
    "TrackedState",
    "TrackedView",
    "ViewFilter",
]
