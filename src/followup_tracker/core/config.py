"""Application configuration models and loader utilities."""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from dotenv import dotenv_values
from pydantic import BaseModel, Field, model_validator

_URGENT_KEYWORDS = ("urgent", "asap", "critical", "deadline", "today", "immediate")
_ACTION_KEYWORDS = (
    "review",
    "approve",
    "feedback",
    "action",
    "required",
    "please respond",
)
_FOLLOW_UP_KEYWORDS = ("follow up", "waiting for", "pending", "next step")


class StorageSettings(BaseModel):
    """Settings for local persistence."""

    db_path: Path = Field(
        default=Path("./followup_tracker.db"), description="SQLite database path"
    )
    snapshot_key: str = Field(
        default="emailFollowupData",
        description="Key of the slot holding the tracked-state snapshot",
    )


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Emit key=value structured log lines"
    )


class ScoringSettings(BaseModel):
    """Point values and thresholds used by the priority scorer."""

    age_points_per_day: float = Field(default=10.0, ge=0.0)
    max_age_points: float = Field(default=50.0, ge=0.0)
    high_importance_points: float = Field(default=30.0)
    flagged_points: float = Field(default=25.0)
    attachment_points: float = Field(default=15.0)
    urgent_points: float = Field(default=35.0)
    action_points: float = Field(default=20.0)
    follow_up_points: float = Field(default=15.0)
    high_threshold: float = Field(
        default=60.0, description="Minimum score classified as high priority"
    )
    medium_threshold: float = Field(
        default=30.0, description="Minimum score classified as medium priority"
    )
    urgent_keywords: tuple[str, ...] = Field(default=_URGENT_KEYWORDS)
    action_keywords: tuple[str, ...] = Field(default=_ACTION_KEYWORDS)
    follow_up_keywords: tuple[str, ...] = Field(default=_FOLLOW_UP_KEYWORDS)

    @model_validator(mode="after")
    def _check_thresholds(self) -> ScoringSettings:
        if self.medium_threshold > self.high_threshold:
            raise ValueError("medium_threshold must not exceed high_threshold")
        return self


class LearningSettings(BaseModel):
    """Reinforcement constants applied when the user acts on a message."""

    completed_reward: float = Field(
        default=5.0, description="Sender weight added when a message is completed"
    )
    snooze_penalty: float = Field(
        default=3.0, description="Sender weight removed when a message is snoozed"
    )
    time_decay: float = Field(
        default=0.1, description="Decay constant stored alongside the weights"
    )
    min_weight: float | None = Field(
        default=None, description="Optional lower bound for sender weights"
    )
    max_weight: float | None = Field(
        default=None, description="Optional upper bound for sender weights"
    )


class MailboxSettings(BaseModel):
    """Settings describing where raw messages are fetched from."""

    source: Literal["sample", "file", "http"] = Field(
        default="sample", description="Mailbox source implementation"
    )
    path: Path | None = Field(
        default=None, description="JSON file used by the file source"
    )
    url: str | None = Field(
        default=None, description="JSON endpoint used by the http source"
    )
    timeout_seconds: float = Field(
        default=10.0, gt=0.0, description="Request timeout for the http source"
    )

    @model_validator(mode="after")
    def _check_source_target(self) -> MailboxSettings:
        if self.source == "file" and self.path is None:
            raise ValueError("path is required when source is 'file'")
        return self


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    learning: LearningSettings = Field(default_factory=LearningSettings)
    mailbox: MailboxSettings = Field(default_factory=MailboxSettings)


ENV_PREFIX = "FOLLOWUP_TRACKER_"


def _settings_path(raw_key: str) -> list[str]:
    """Map ``PREFIX_SCORING__HIGH_THRESHOLD`` to ``["scoring", "high_threshold"]``."""
    return [part.lower() for part in raw_key.removeprefix(ENV_PREFIX).split("__") if part]


def _coerce(value: str | None) -> Any:
    """Turn empty strings into ``None`` and boolean words into booleans."""
    if value is None or value == "":
        return None
    return {"true": True, "false": False}.get(value.lower(), value)


def _prefixed(values: Mapping[str, str | None]) -> dict[str, str | None]:
    return {
        key: value for key, value in values.items() if key and key.startswith(ENV_PREFIX)
    }


def _collect_env_values(
    env_file: Path | str | None, *, include_environment: bool = True
) -> dict[str, Any]:
    """Build a nested settings tree from the env file, then the process environment."""
    sources: list[dict[str, str | None]] = []
    if env_file and Path(env_file).is_file():
        sources.append(_prefixed(dotenv_values(env_file)))
    if include_environment:
        sources.append(_prefixed(os.environ))

    tree: dict[str, Any] = {}
    for source in sources:
        for key, value in source.items():
            path = _settings_path(key)
            if not path:
                continue
            node = tree
            for part in path[:-1]:
                node = node.setdefault(part, {})
            node[path[-1]] = _coerce(value)
    return tree


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load settings from defaults, an optional env file, the environment and overrides.

    Later sources win. The result is cached; call ``load_app_settings.cache_clear()``
    to force a reload.
    """
    collected = _collect_env_values(env_file, include_environment=include_environment)
    collected.update(overrides)
    return AppSettings.model_validate(collected)


__all__ = [
    "AppSettings",
    "LearningSettings",
    "LoggingSettings",
    "MailboxSettings",
    "ScoringSettings",
    "StorageSettings",
    "load_app_settings",
]
