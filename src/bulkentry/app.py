"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from bulkentry.adapters.csv_rows import RejectedRowWriter, check_input_file, read_csv_rows
from bulkentry.adapters.toggl import TogglClient
from bulkentry.config import get_toggl_config, get_upload_config
from bulkentry.domain.pipeline import UploadSummary, log_rejection, run_pipeline

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from bulkentry.config import TogglConfig, UploadConfig
    from bulkentry.domain.ports import RejectedRowObserver

type TogglClientFactory = Callable[[TogglConfig, str], TogglClient]


log = getLogger(__name__)


def _default_toggl_client(config: TogglConfig, created_with: str) -> TogglClient:
    return TogglClient(config=config, created_with=created_with)


def upload_time_entries(
    csv_path: Path,
    *,
    headers: Sequence[str] | None = None,
    delimiter: str = ",",
    rejected_path: Path | None = None,
    dry_run: bool = False,
    toggl_config: TogglConfig | None = None,
    upload_config: UploadConfig | None = None,
    client_factory: TogglClientFactory | None = None,
) -> UploadSummary:
    """Resolve every row of ``csv_path`` and create the valid ones as Toggl time entries."""

    # precondition faults surface before any remote call
    resolved_path = check_input_file(csv_path)
    effective_toggl = toggl_config or get_toggl_config()
    effective_upload = upload_config or get_upload_config()
    factory = client_factory or _default_toggl_client

    log.info(
        "Starting upload: csv=%s, headers=%s, dry_run=%s, rejected=%s",
        resolved_path,
        list(headers) if headers else "inferred",
        dry_run,
        rejected_path,
    )

    with ExitStack() as stack:
        on_rejected: RejectedRowObserver = log_rejection
        if rejected_path is not None:
            on_rejected = stack.enter_context(RejectedRowWriter(rejected_path))

        summary = asyncio.run(
            _upload_async(
                rows_path=resolved_path,
                headers=headers,
                delimiter=delimiter,
                on_rejected=on_rejected,
                dry_run=dry_run,
                client_factory=factory,
                toggl_config=effective_toggl,
                upload_config=effective_upload,
            )
        )

    log.info(
        f"Finished upload: rows={summary.rows}, accepted={summary.accepted}, "
        f"rejected={summary.rejected}, submitted={summary.submitted}"
    )
    return summary


async def _upload_async(
    *,
    rows_path: Path,
    headers: Sequence[str] | None,
    delimiter: str,
    on_rejected: RejectedRowObserver,
    dry_run: bool,
    client_factory: TogglClientFactory,
    toggl_config: TogglConfig,
    upload_config: UploadConfig,
) -> UploadSummary:
    async with client_factory(toggl_config, upload_config.created_with) as client:
        snapshot = await client.fetch_snapshot()
        return await run_pipeline(
            read_csv_rows(rows_path, headers=headers, delimiter=delimiter),
            snapshot=snapshot,
            sink=None if dry_run else client,
            on_rejected=on_rejected,
            queue_size=upload_config.queue_size,
            tz=upload_config.timezone,
        )
