"""Translate Toggl payloads into domain entities and records into request bodies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bulkentry.domain.model import (
    Client,
    DomainSnapshot,
    Project,
    Tag,
    Task,
    User,
    Workspace,
)
from bulkentry.domain.ports import SnapshotError

from .schema import MeResponse, TimeEntryRequest

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from bulkentry.domain.model import ResolvedRecord


def translate_snapshot(payload: MeResponse | Mapping[str, object]) -> DomainSnapshot:
    me = payload if isinstance(payload, MeResponse) else MeResponse.model_validate(payload)
    if not me.workspaces:
        raise SnapshotError("The authenticated user has no accessible workspaces")

    return DomainSnapshot(
        user=User(
            full_name=me.fullname,
            email=me.email,
            default_workspace_id=me.default_workspace_id,
        ),
        workspaces=tuple(Workspace(id=w.id, name=w.name) for w in me.workspaces),
        clients=tuple(
            Client(id=c.id, name=c.name, workspace_id=c.workspace_id) for c in me.clients
        ),
        projects=tuple(
            Project(id=p.id, name=p.name, workspace_id=p.workspace_id, client_id=p.client_id)
            for p in me.projects
        ),
        tasks=tuple(
            Task(id=t.id, name=t.name, workspace_id=t.workspace_id, project_id=t.project_id)
            for t in me.tasks
        ),
        tags=tuple(Tag(id=t.id, name=t.name, workspace_id=t.workspace_id) for t in me.tags),
    )


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def translate_time_entry(record: ResolvedRecord, *, created_with: str) -> TimeEntryRequest:
    if record.workspace_id is None:
        raise ValueError("Cannot submit a time entry without a workspace")
    return TimeEntryRequest(
        created_with=created_with,
        workspace_id=record.workspace_id,
        description=record.description,
        billable=record.billable,
        start=_isoformat(record.start),
        stop=_isoformat(record.stop),
        duration=record.duration,
        project_id=record.project_id,
        task_id=record.task_id,
        tag_ids=list(record.tag_ids),
    )
