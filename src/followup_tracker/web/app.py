"""FastAPI web application exposing the follow-up tracker."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastapi import FastAPI, status as http_status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from followup_tracker.core import AppSettings, load_app_settings
from followup_tracker.core.datetime_utils import days_ago_label, serialize_datetime
from followup_tracker.core.models import (
    ActionKind,
    ActionOutcome,
    TrackedMessage,
    TrackedView,
    ViewFilter,
)
from followup_tracker.ingestion import build_mailbox_source
from followup_tracker.intelligence import recommend_action
from followup_tracker.storage import SqliteSnapshotStore
from followup_tracker.tracker import FollowUpTracker

LOGGER = logging.getLogger(__name__)


class ActionRequest(BaseModel):
    """Body of a mark-action request."""

    action: ActionKind


class ClearRequest(BaseModel):
    """Body of a clear-all request; ``confirm`` must be true to proceed."""

    confirm: bool = False


def create_app(
    settings: AppSettings | None = None,
    tracker: FollowUpTracker | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = settings or load_app_settings()
    store: SqliteSnapshotStore | None = None
    if tracker is None:
        store = SqliteSnapshotStore(app_settings.storage)
        tracker = FollowUpTracker(
            store, build_mailbox_source(app_settings.mailbox), app_settings
        )
    service = tracker
    app = FastAPI(title="Follow-up Tracker")

    @app.on_event("shutdown")
    def shutdown_event() -> None:
        """Close the snapshot store opened by this app."""
        if store is not None:
            store.close()
            LOGGER.info("Snapshot store closed")

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/follow-ups")
    def list_follow_ups(filter: ViewFilter = ViewFilter.ALL) -> dict[str, Any]:  # noqa: A002
        return _serialize_view(service.view(filter), service.now())

    @app.post("/api/refresh")
    def refresh() -> dict[str, Any]:
        outcome = service.refresh()
        return {
            "success": outcome.success,
            "message": outcome.message,
            "ingested": outcome.ingested,
            "view": _serialize_view(service.view(), service.now()),
        }

    @app.post("/api/follow-ups/{message_id}/actions")
    def mark_action(message_id: str, payload: ActionRequest) -> JSONResponse:
        outcome = service.mark_action(message_id, payload.action)
        status_code = (
            http_status.HTTP_200_OK
            if outcome is ActionOutcome.APPLIED
            else http_status.HTTP_404_NOT_FOUND
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "messageId": message_id,
                "action": payload.action.value,
                "outcome": outcome.value,
            },
        )

    @app.post("/api/clear")
    def clear_all(payload: ClearRequest) -> JSONResponse:
        outcome = service.clear_all(confirm=payload.confirm)
        status_code = (
            http_status.HTTP_200_OK
            if outcome.success
            else http_status.HTTP_400_BAD_REQUEST
        )
        return JSONResponse(
            status_code=status_code,
            content={"success": outcome.success, "message": outcome.message},
        )

    return app


def _serialize_view(view: TrackedView, now: datetime) -> dict[str, Any]:
    return {
        "filter": view.filter_key.value,
        "emails": [_serialize_message(message, now) for message in view.messages],
        "totalCount": view.total_count,
        "pendingCount": view.pending_count,
        "highPriorityCount": view.high_priority_count,
    }


def _serialize_message(message: TrackedMessage, now: datetime) -> dict[str, Any]:
    return {
        "id": message.id,
        "subject": message.subject,
        "sender": message.sender,
        "from": message.sender_address,
        "receivedTime": serialize_datetime(message.received_at),
        "daysAgo": days_ago_label(message.received_at, now),
        "hasAttachments": message.has_attachments,
        "importance": message.importance.value,
        "isFlagged": message.is_flagged,
        "priority": message.priority.value,
        "status": message.status.value,
        "lastUpdated": serialize_datetime(message.last_updated),
        "recommendation": recommend_action(message),
        "actionHistory": [
            {
                "action": record.action.value,
                "timestamp": serialize_datetime(record.timestamp),
            }
            for record in message.action_history
        ],
    }


__all__ = ["create_app"]
