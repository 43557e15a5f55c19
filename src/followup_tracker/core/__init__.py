"""Core utilities for configuration, logging, and domain models."""

from .config import AppSettings, LearningSettings, ScoringSettings, load_app_settings
from .logging import configure_logging

__all__ = [
    "AppSettings",
    "LearningSettings",
    "ScoringSettings",
    "configure_logging",
    "load_app_settings",
]
