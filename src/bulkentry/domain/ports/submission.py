"""Ports for submitting accepted records and observing rejected rows."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bulkentry.domain.model import CreatedEntry, ResolvedRecord
    from bulkentry.domain.validation import Rejection


class SubmissionError(RuntimeError):
    """Raised when the sink fails to create an entry; fatal to the run."""


@runtime_checkable
class TimeEntrySink(Protocol):
    """Creates one validated record remotely and returns the created entry."""

    async def __call__(self, record: ResolvedRecord) -> CreatedEntry: ...


type RejectedRowObserver = Callable[[Mapping[str, str], Rejection], None]


__all__ = ["RejectedRowObserver", "SubmissionError", "TimeEntrySink"]
