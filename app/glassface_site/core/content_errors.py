from __future__ import annotations


class ContentSourceError(RuntimeError):
    """Raised when the remote content source cannot answer a query."""


class SnapshotReadError(RuntimeError):
    """Raised when the local project snapshot is missing or unreadable."""
