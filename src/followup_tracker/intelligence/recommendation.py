"""Rule-based suggested actions for tracked messages."""

from __future__ import annotations

from dataclasses import dataclass

from followup_tracker.core.models import TrackedMessage

DEFAULT_RECOMMENDATION = "Take appropriate action on this email"


@dataclass(frozen=True)
class _RecommendationRule:
    keywords: tuple[str, ...]
    text: str


# Evaluated in order; the first rule with a matching keyword wins.
_RULES: tuple[_RecommendationRule, ...] = (
    _RecommendationRule(
        keywords=("review", "feedback"),
        text="Review the content and provide feedback",
    ),
    _RecommendationRule(keywords=("approve",), text="Review and approve the request"),
    _RecommendationRule(
        keywords=("meeting",), text="Confirm your attendance or reschedule"
    ),
    _RecommendationRule(
        keywords=("deadline",), text="Check deadline and take necessary action"
    ),
)


def recommend_action(message: TrackedMessage) -> str:
    """Return a human-readable next step derived from the message body."""
    body = message.body.lower()
    for rule in _RULES:
        if any(keyword in body for keyword in rule.keywords):
            return rule.text
    return DEFAULT_RECOMMENDATION


__all__ = ["DEFAULT_RECOMMENDATION", "recommend_action"]
