"""Persistence adapters."""

from .sqlite import SqliteSnapshotStore

__all__ = ["SqliteSnapshotStore"]
