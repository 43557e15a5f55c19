"""JSON codec for the tracked-state snapshot.

The on-disk layout keeps the camelCase keys used by the browser add-in that
first produced these snapshots, so existing payloads load unchanged::

    {"emails": [...], "actions": [...],
     "learningWeights": {"sender": {...}, "keywords": {...}, "timeDecay": 0.1}}
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .datetime_utils import parse_datetime, serialize_datetime
from .interfaces import SnapshotError
from .models import (
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


def state_to_dict(state: TrackedState) -> dict[str, Any]:
    """Return a JSON-ready mapping for ``state``."""
    return {
        "emails": [_message_to_dict(message) for message in state.messages],
        "actions": [
            {
                "emailId": record.message_id,
                "action": record.action.value,
                "timestamp": serialize_datetime(record.timestamp),
            }
            for record in state.actions
        ],
        "learningWeights": {
            "sender": dict(state.learning_weights.sender),
            "keywords": dict(state.learning_weights.keywords),
            "timeDecay": state.learning_weights.time_decay,
        },
    }


def state_from_dict(payload: Mapping[str, Any]) -> TrackedState:
    """Rebuild a :class:`TrackedState` from a decoded snapshot mapping."""
    if not isinstance(payload, Mapping):
        raise SnapshotError("Snapshot root must be an object")
    try:
        messages = [_message_from_dict(item) for item in payload.get("emails", [])]
        actions = [
            GlobalActionRecord(
                message_id=str(item["emailId"]),
                action=ActionKind(item["action"]),
                timestamp=_required_datetime(item["timestamp"]),
            )
            for item in payload.get("actions", [])
        ]
        raw_weights = payload.get("learningWeights") or {}
        weights = LearningWeights(
            sender={
                str(key): float(value)
                for key, value in (raw_weights.get("sender") or {}).items()
            },
            keywords={
                str(key): float(value)
                for key, value in (raw_weights.get("keywords") or {}).items()
            },
            time_decay=float(raw_weights.get("timeDecay", 0.1)),
        )
    except (KeyError, TypeError, ValueError, OverflowError, AttributeError) as exc:
        raise SnapshotError(f"Malformed snapshot: {exc}") from exc
    return TrackedState(messages=messages, actions=actions, learning_weights=weights)


def dumps_state(state: TrackedState) -> str:
    """Serialise ``state`` to a JSON string."""
    return json.dumps(state_to_dict(state))


def loads_state(raw: str) -> TrackedState:
    """Decode a JSON snapshot string, raising ``SnapshotError`` when invalid."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotError("Snapshot is not valid JSON") from exc
    return state_from_dict(payload)


def _message_to_dict(message: TrackedMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "subject": message.subject,
        "from": message.sender_address,
        "sender": message.sender,
        "receivedTime": serialize_datetime(message.received_at),
        "hasAttachments": message.has_attachments,
        "importance": message.importance.value,
        "isRead": message.is_read,
        "isFlagged": message.is_flagged,
        "body": message.body,
        "priority": message.priority.value,
        "status": message.status.value,
        "lastUpdated": serialize_datetime(message.last_updated),
        "actionHistory": [
            {
                "action": record.action.value,
                "timestamp": serialize_datetime(record.timestamp),
            }
            for record in message.action_history
        ],
    }


def _message_from_dict(item: Mapping[str, Any]) -> TrackedMessage:
    return TrackedMessage(
        id=str(item["id"]),
        subject=item.get("subject") or "",
        sender=item.get("sender") or "",
        sender_address=item.get("from") or "",
        received_at=_required_datetime(item["receivedTime"]),
        has_attachments=bool(item.get("hasAttachments", False)),
        importance=Importance(item.get("importance") or Importance.NORMAL),
        is_flagged=bool(item.get("isFlagged", False)),
        is_read=bool(item.get("isRead", False)),
        body=item.get("body") or "",
        priority=PriorityTier(item["priority"]),
        status=MessageStatus(item.get("status") or MessageStatus.PENDING),
        last_updated=_required_datetime(item["lastUpdated"]),
        action_history=[
            ActionRecord(
                action=ActionKind(record["action"]),
                timestamp=_required_datetime(record["timestamp"]),
            )
            for record in item.get("actionHistory", [])
        ],
    )


def _required_datetime(value: Any) -> datetime:
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError("timestamp is required")
    return parsed


__all__ = ["dumps_state", "loads_state", "state_from_dict", "state_to_dict"]
