from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from bulkentry.domain.model import CreatedEntry
from bulkentry.domain.pipeline import run_pipeline
from bulkentry.domain.ports import SubmissionError, TimeEntrySink
from bulkentry.domain.validation import RejectionCode

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from bulkentry.domain.model import DomainSnapshot, ResolvedRecord
    from bulkentry.domain.validation import Rejection


class RecordingSink:
    def __init__(self, *, fail_on: int | None = None) -> None:
        self.records: list[ResolvedRecord] = []
        self.fail_on = fail_on
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, record: ResolvedRecord) -> CreatedEntry:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if self.fail_on is not None and len(self.records) + 1 == self.fail_on:
                raise RuntimeError("remote refused")
            self.records.append(record)
            return CreatedEntry(id=len(self.records))
        finally:
            self.in_flight -= 1


class RejectionLog:
    def __init__(self) -> None:
        self.entries: list[tuple[Mapping[str, str], Rejection]] = []

    def __call__(self, row: Mapping[str, str], rejection: Rejection) -> None:
        self.entries.append((row, rejection))


ROWS: list[dict[str, str]] = [
    {"Task": "T1", "Duration": "0:30:00", "Description": "first"},
    {"Project": "P1", "Client": "OtherClient", "Duration": "60"},
    {"Project": "P2", "Duration": "90", "Description": "second"},
    {"Task": "1003", "Duration": "120", "Description": "third"},
]


def test_recording_sink_satisfies_port() -> None:
    assert isinstance(RecordingSink(), TimeEntrySink)


def test_pipeline_submits_accepted_rows_in_order(snapshot: DomainSnapshot) -> None:
    sink = RecordingSink()
    rejections = RejectionLog()

    summary = asyncio.run(
        run_pipeline(ROWS, snapshot=snapshot, sink=sink, on_rejected=rejections, queue_size=1)
    )

    assert [record.description for record in sink.records] == ["first", "second", "third"]
    assert [record.workspace_id for record in sink.records] == [1, 1, 2]
    assert summary.rows == 4
    assert summary.accepted == 3
    assert summary.rejected == 1
    assert summary.submitted == 3
    assert summary.created_ids == [1, 2, 3]
    assert sink.max_in_flight == 1


def test_rejected_rows_reach_observer_without_stopping(snapshot: DomainSnapshot) -> None:
    rejections = RejectionLog()

    asyncio.run(
        run_pipeline(ROWS, snapshot=snapshot, sink=RecordingSink(), on_rejected=rejections)
    )

    assert len(rejections.entries) == 1
    row, rejection = rejections.entries[0]
    assert row is ROWS[1]
    assert rejection.code is RejectionCode.PROJECT_CLIENT_MISMATCH


def test_submission_failure_is_fatal(snapshot: DomainSnapshot) -> None:
    sink = RecordingSink(fail_on=2)

    with pytest.raises(SubmissionError) as excinfo:
        asyncio.run(run_pipeline(ROWS, snapshot=snapshot, sink=sink, on_rejected=RejectionLog()))

    assert [record.description for record in sink.records] == ["first"]
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "second" in str(excinfo.value)


def test_dry_run_submits_nothing(snapshot: DomainSnapshot) -> None:
    summary = asyncio.run(
        run_pipeline(ROWS, snapshot=snapshot, sink=None, on_rejected=RejectionLog())
    )

    assert summary.accepted == 3
    assert summary.submitted == 0
    assert summary.created_ids == []


def test_rows_are_consumed_lazily(snapshot: DomainSnapshot) -> None:
    consumed: list[int] = []

    def rows() -> Iterator[dict[str, str]]:
        for index, row in enumerate(ROWS):
            consumed.append(index)
            yield row

    summary = asyncio.run(
        run_pipeline(rows(), snapshot=snapshot, sink=RecordingSink(), on_rejected=RejectionLog())
    )

    assert consumed == [0, 1, 2, 3]
    assert summary.rows == 4


def test_empty_source(snapshot: DomainSnapshot) -> None:
    summary = asyncio.run(run_pipeline([], snapshot=snapshot, sink=RecordingSink()))

    assert summary.rows == 0
    assert summary.submitted == 0
