"""Row-to-submission pipeline.

Rows are resolved and validated one at a time in file order. Accepted records go
onto a bounded queue drained by a single submitter, so resolution runs ahead of
the rate-limited sink while a full queue applies backpressure. A rejected row is
reported to the observer and the stream continues; a failed submission stops the
run.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .candidates import build_candidate
from .ports import SubmissionError
from .resolution import resolve_record
from .validation import validate_record

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import tzinfo

    from .model import DomainSnapshot, EntityId, ResolvedRecord
    from .ports import RejectedRowObserver, RowSource, TimeEntrySink
    from .validation import Rejection, ValidationOutcome

log = getLogger(__name__)

DEFAULT_QUEUE_SIZE = 50


@dataclass(slots=True)
class RowOutcome:
    row: Mapping[str, str]
    record: ResolvedRecord
    outcome: ValidationOutcome


@dataclass(slots=True)
class UploadSummary:
    """Outcome of one upload run."""

    rows: int = 0
    accepted: int = 0
    rejected: int = 0
    submitted: int = 0
    created_ids: list[EntityId] = field(default_factory=list["EntityId"])


def log_rejection(row: Mapping[str, str], rejection: Rejection) -> None:
    log.warning("Rejected row %s: %s", dict(row), rejection.message)


def process_row(
    row: Mapping[str, str],
    snapshot: DomainSnapshot,
    *,
    tz: tzinfo | None = None,
) -> RowOutcome:
    """Resolve and validate a single raw row against ``snapshot``."""

    candidate = build_candidate(row, tz=tz)
    record = resolve_record(candidate, snapshot)
    return RowOutcome(row=row, record=record, outcome=validate_record(record, snapshot))


async def run_pipeline(
    rows: RowSource,
    *,
    snapshot: DomainSnapshot,
    sink: TimeEntrySink | None,
    on_rejected: RejectedRowObserver = log_rejection,
    queue_size: int = DEFAULT_QUEUE_SIZE,
    tz: tzinfo | None = None,
) -> UploadSummary:
    """Stream ``rows`` through resolution and validation into ``sink``.

    With ``sink=None`` accepted records are counted but nothing is submitted.
    """

    summary = UploadSummary()
    queue: asyncio.Queue[ResolvedRecord | None] = asyncio.Queue(maxsize=queue_size)

    async def produce() -> None:
        for row in rows:
            summary.rows += 1
            result = process_row(row, snapshot, tz=tz)
            rejection = result.outcome.rejection
            if rejection is not None:
                summary.rejected += 1
                on_rejected(row, rejection)
                continue
            summary.accepted += 1
            await queue.put(result.record)
        await queue.put(None)

    async def consume() -> None:
        while (record := await queue.get()) is not None:
            if sink is None:
                continue
            try:
                created = await sink(record)
            except Exception as exc:
                raise SubmissionError(
                    f"Failed to create time entry {record.description!r}: {exc}"
                ) from exc
            summary.submitted += 1
            summary.created_ids.append(created.id)
            log.info("Created time entry %s (%s)", created.id, record.description)

    producer = asyncio.create_task(produce(), name="bulkentry-resolve")
    consumer = asyncio.create_task(consume(), name="bulkentry-submit")
    try:
        await asyncio.gather(producer, consumer)
    finally:
        for task in (producer, consumer):
            task.cancel()
        await asyncio.gather(producer, consumer, return_exceptions=True)

    log.info(
        "Processed %s rows: accepted=%s, rejected=%s, submitted=%s",
        summary.rows,
        summary.accepted,
        summary.rejected,
        summary.submitted,
    )
    return summary
