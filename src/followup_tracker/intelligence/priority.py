"""Heuristic priority scoring for tracked messages."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from followup_tracker.core.config import ScoringSettings
from followup_tracker.core.datetime_utils import days_between
from followup_tracker.core.models import (
    Importance,
    LearningWeights,
    PriorityTier,
    TrackedMessage,
)

_DEFAULT_SETTINGS = ScoringSettings()


def compute_score(
    message: TrackedMessage,
    weights: LearningWeights,
    now: datetime,
    settings: ScoringSettings | None = None,
) -> float:
    """Return the additive priority score for ``message`` at instant ``now``.

    The running total is never clamped; only the age term is capped. A
    received time later than ``now`` contributes no age points.
    """
    settings = settings or _DEFAULT_SETTINGS
    score = 0.0

    days_old = max(days_between(message.received_at, now), 0.0)
    score += min(days_old * settings.age_points_per_day, settings.max_age_points)

    if message.importance is Importance.HIGH:
        score += settings.high_importance_points
    if message.is_flagged:
        score += settings.flagged_points
    if message.has_attachments:
        score += settings.attachment_points

    text = f"{message.body.lower()} {message.subject.lower()}"
    if _contains_any(text, settings.urgent_keywords):
        score += settings.urgent_points
    if _contains_any(text, settings.action_keywords):
        score += settings.action_points
    if _contains_any(text, settings.follow_up_keywords):
        score += settings.follow_up_points

    score += weights.sender.get(message.sender.lower(), 0.0)
    return score


def classify_score(score: float, settings: ScoringSettings | None = None) -> PriorityTier:
    """Map a numeric score onto a priority tier; boundaries go to the higher tier."""
    settings = settings or _DEFAULT_SETTINGS
    if score >= settings.high_threshold:
        return PriorityTier.HIGH
    if score >= settings.medium_threshold:
        return PriorityTier.MEDIUM
    return PriorityTier.LOW


def score_message(
    message: TrackedMessage,
    weights: LearningWeights,
    now: datetime,
    settings: ScoringSettings | None = None,
) -> PriorityTier:
    """Return the priority tier for ``message`` given the learned weights."""
    return classify_score(compute_score(message, weights, now, settings), settings)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


__all__ = ["classify_score", "compute_score", "score_message"]
