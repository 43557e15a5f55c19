"""Tests for the SQLite-backed snapshot store."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

import pytest

from followup_tracker.core.config import StorageSettings
from followup_tracker.core.models import TrackedState
from followup_tracker.storage import SqliteSnapshotStore


def test_load_returns_none_when_empty(tmp_path: Path) -> None:
    with SqliteSnapshotStore(StorageSettings(db_path=tmp_path / "empty.db")) as store:
        assert store.load() is None


def test_save_and_load_round_trip(tmp_path: Path, sample_state: TrackedState) -> None:
    settings = StorageSettings(db_path=tmp_path / "nested" / "state.db")

    with SqliteSnapshotStore(settings) as store:
        store.save(sample_state)

    with SqliteSnapshotStore(settings) as store:
        restored = store.load()

    assert restored == sample_state


def test_save_overwrites_single_slot(
    tmp_path: Path, sample_state: TrackedState
) -> None:
    db_path = tmp_path / "slot.db"
    with SqliteSnapshotStore(StorageSettings(db_path=db_path)) as store:
        store.save(sample_state)
        store.save(TrackedState())
        assert store.load() == TrackedState()

    with sqlite3.connect(db_path) as conn:
        (count,) = conn.execute("SELECT COUNT(*) FROM snapshots").fetchone()
    assert count == 1


def test_snapshot_keys_are_isolated(
    tmp_path: Path, sample_state: TrackedState
) -> None:
    db_path = tmp_path / "keys.db"
    with SqliteSnapshotStore(StorageSettings(db_path=db_path, snapshot_key="a")) as first:
        first.save(sample_state)
    with SqliteSnapshotStore(StorageSettings(db_path=db_path, snapshot_key="b")) as second:
        assert second.load() is None


def test_corrupted_snapshot_is_logged_and_ignored(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with SqliteSnapshotStore(StorageSettings(db_path=tmp_path / "bad.db")) as store:
        store.save_raw("{definitely not json")
        with caplog.at_level(logging.ERROR, logger="followup_tracker.storage.sqlite"):
            assert store.load() is None

    assert "Discarding unreadable snapshot" in caplog.text


def test_clear_removes_snapshot(tmp_path: Path, sample_state: TrackedState) -> None:
    with SqliteSnapshotStore(StorageSettings(db_path=tmp_path / "clear.db")) as store:
        store.save(sample_state)
        store.clear()
        assert store.load() is None
        assert store.load_raw() is None
