"""Scoring, recommendation, learning, and ranking heuristics."""

from .learning import adjust_sender_weight, apply_action
from .priority import classify_score, compute_score, score_message
from .ranking import build_view
from .recommendation import DEFAULT_RECOMMENDATION, recommend_action

__all__ = [
    "DEFAULT_RECOMMENDATION",
    "adjust_sender_weight",
    "apply_action",
    "build_view",
    "classify_score",
    "compute_score",
    "recommend_action",
    "score_message",
]
