"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import RowSource, SnapshotError, SnapshotFetcher
from .submission import RejectedRowObserver, SubmissionError, TimeEntrySink

__all__ = [
    "RejectedRowObserver",
    "RowSource",
    "SnapshotError",
    "SnapshotFetcher",
    "SubmissionError",
    "TimeEntrySink",
]
