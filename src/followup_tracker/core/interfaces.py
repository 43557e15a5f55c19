"""Protocol interfaces for decoupling components."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .models import TrackedState

RawMessage = Mapping[str, Any]


class MailboxError(RuntimeError):
    """Raised when a mailbox source cannot deliver messages."""


class SnapshotError(RuntimeError):
    """Raised when a stored snapshot cannot be decoded."""


class MailboxSource(Protocol):
    """Abstraction over the host mailbox supplying raw message records."""

    def fetch_messages(self) -> Sequence[RawMessage]:
        """Return raw message records; raise ``MailboxError`` on failure."""
        raise NotImplementedError


class SnapshotStore(Protocol):
    """Single key-value slot holding the tracked-state snapshot."""

    def load(self) -> TrackedState | None:
        """Return the previously saved state, or ``None`` when absent."""
        raise NotImplementedError

    def save(self, state: TrackedState) -> None:
        """Overwrite the stored snapshot with ``state``."""
        raise NotImplementedError

    def clear(self) -> None:
        """Delete the stored snapshot."""
        raise NotImplementedError


__all__ = [
    "MailboxError",
    "MailboxSource",
    "RawMessage",
    "SnapshotError",
    "SnapshotStore",
]
