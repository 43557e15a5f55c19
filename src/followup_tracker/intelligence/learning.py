"""Feedback loop adjusting sender weights from user actions."""

from __future__ import annotations

import logging
from datetime import datetime

from followup_tracker.core.config import LearningSettings
from followup_tracker.core.models import (
    ActionKind,
    ActionOutcome,
    ActionRecord,
    GlobalActionRecord,
    LearningWeights,
    MessageStatus,
    TrackedState,
)

LOGGER = logging.getLogger(__name__)

_DEFAULT_SETTINGS = LearningSettings()


def apply_action(
    state: TrackedState,
    message_id: str,
    action: ActionKind,
    now: datetime,
    settings: LearningSettings | None = None,
) -> ActionOutcome:
    """Record ``action`` against ``message_id`` and update the sender weight.

    ``state`` is mutated in place. An unknown id leaves it untouched and
    yields :attr:`ActionOutcome.NOT_FOUND`. Only ``completed`` changes the
    message status; every other action just advances ``last_updated``.
    """
    settings = settings or _DEFAULT_SETTINGS
    message = state.find_message(message_id)
    if message is None:
        LOGGER.info("Ignoring %s for unknown message %s", action.value, message_id)
        return ActionOutcome.NOT_FOUND

    message.action_history.append(ActionRecord(action=action, timestamp=now))
    if action is ActionKind.COMPLETED:
        message.status = MessageStatus.COMPLETED
    else:
        message.last_updated = now

    sender_key = message.sender.lower()
    weight = adjust_sender_weight(state.learning_weights, sender_key, action, settings)
    LOGGER.debug("Sender %r weight is now %s after %s", sender_key, weight, action.value)

    state.actions.append(
        GlobalActionRecord(message_id=message_id, action=action, timestamp=now)
    )
    return ActionOutcome.APPLIED


def adjust_sender_weight(
    weights: LearningWeights,
    sender_key: str,
    action: ActionKind,
    settings: LearningSettings | None = None,
) -> float:
    """Apply the reward or penalty for ``action`` and return the new weight."""
    settings = settings or _DEFAULT_SETTINGS
    weight = weights.sender.get(sender_key, 0.0)
    if action is ActionKind.COMPLETED:
        weight += settings.completed_reward
    elif action is ActionKind.SNOOZE:
        weight -= settings.snooze_penalty
    if settings.min_weight is not None:
        weight = max(weight, settings.min_weight)
    if settings.max_weight is not None:
        weight = min(weight, settings.max_weight)
    weights.sender[sender_key] = weight
    return weight


__all__ = ["adjust_sender_weight", "apply_action"]
