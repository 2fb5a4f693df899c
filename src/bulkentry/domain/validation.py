"""Consistency checks for resolved records.

Every relationship is re-derived from the resolved ids and checked against the
snapshot, in both directions where a task and project are both present. A failed
check is an expected business outcome and comes back as a ``Rejection``; nothing
here raises for bad row data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .model import HierarchyLevel, MatchStatus

if TYPE_CHECKING:
    from .model import DomainSnapshot, ResolvedRecord


class RejectionCode(StrEnum):
    USER_MISMATCH = "user_mismatch"
    EMAIL_MISMATCH = "email_mismatch"
    TASK_NOT_FOUND = "task_not_found"
    TASK_AMBIGUOUS = "task_ambiguous"
    TASK_PROJECT_MISMATCH = "task_project_mismatch"
    TASK_WORKSPACE_MISMATCH = "task_workspace_mismatch"
    PROJECT_NOT_FOUND = "project_not_found"
    PROJECT_AMBIGUOUS = "project_ambiguous"
    PROJECT_CLIENT_MISMATCH = "project_client_mismatch"
    PROJECT_WORKSPACE_MISMATCH = "project_workspace_mismatch"
    CLIENT_NOT_FOUND = "client_not_found"
    CLIENT_AMBIGUOUS = "client_ambiguous"
    CLIENT_WORKSPACE_MISMATCH = "client_workspace_mismatch"
    WORKSPACE_NOT_FOUND = "workspace_not_found"
    WORKSPACE_AMBIGUOUS = "workspace_ambiguous"
    TAG_WORKSPACE_MISMATCH = "tag_workspace_mismatch"
    DURATION_MISSING = "duration_missing"
    NEGATIVE_DURATION = "negative_duration"


@dataclass(frozen=True, slots=True)
class Rejection:
    code: RejectionCode
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = ValidationOutcome()

_NOT_FOUND_CODES = {
    HierarchyLevel.TASK: RejectionCode.TASK_NOT_FOUND,
    HierarchyLevel.PROJECT: RejectionCode.PROJECT_NOT_FOUND,
    HierarchyLevel.CLIENT: RejectionCode.CLIENT_NOT_FOUND,
    HierarchyLevel.WORKSPACE: RejectionCode.WORKSPACE_NOT_FOUND,
}
_AMBIGUOUS_CODES = {
    HierarchyLevel.TASK: RejectionCode.TASK_AMBIGUOUS,
    HierarchyLevel.PROJECT: RejectionCode.PROJECT_AMBIGUOUS,
    HierarchyLevel.CLIENT: RejectionCode.CLIENT_AMBIGUOUS,
    HierarchyLevel.WORKSPACE: RejectionCode.WORKSPACE_AMBIGUOUS,
}


def _reject(code: RejectionCode, message: str) -> ValidationOutcome:
    return ValidationOutcome(Rejection(code, message))


def _fold_whitespace(value: str) -> str:
    return " ".join(value.split()).casefold()


def _missing_level(record: ResolvedRecord, level: HierarchyLevel) -> ValidationOutcome:
    match = record.hierarchy.match_for(level)
    if match.status is MatchStatus.AMBIGUOUS:
        return _reject(
            _AMBIGUOUS_CODES[level],
            f"{level} reference {match.reference!r} is ambiguous: "
            f"it matches {match.candidates} {level}s",
        )
    if match.status is MatchStatus.NOT_FOUND:
        return _reject(
            _NOT_FOUND_CODES[level],
            f"{level} reference {match.reference!r} does not match any accessible {level}",
        )
    resolved_id = getattr(record, f"{level}_id")
    if resolved_id is None:
        return _reject(_NOT_FOUND_CODES[level], f"no {level} given and none could be inferred")
    return _reject(
        _NOT_FOUND_CODES[level],
        f"{level} id {resolved_id!r} does not correspond to an existing {level}",
    )


def validate_record(record: ResolvedRecord, snapshot: DomainSnapshot) -> ValidationOutcome:
    """Accept ``record`` only if its identity and hierarchy agree with ``snapshot``."""

    user = snapshot.user

    if record.full_name is not None and record.full_name.strip():
        expected = user.full_name or ""
        if not expected.strip() or _fold_whitespace(record.full_name) != _fold_whitespace(
            expected
        ):
            return _reject(
                RejectionCode.USER_MISMATCH,
                f"user {record.full_name!r} does not match the authenticated user",
            )

    if record.email is not None and record.email.strip():
        expected_email = (user.email or "").strip().casefold()
        if not expected_email or record.email.strip().casefold() != expected_email:
            return _reject(
                RejectionCode.EMAIL_MISMATCH,
                f"email {record.email!r} does not match the authenticated user's email",
            )

    task = snapshot.task(record.task_id)
    project = snapshot.project(record.project_id)
    client = snapshot.client(record.client_id)
    workspace = snapshot.workspace(record.workspace_id)

    if record.task_id is not None:
        if task is None:
            return _missing_level(record, HierarchyLevel.TASK)
        if record.workspace_id is not None and task.workspace_id != record.workspace_id:
            return _reject(
                RejectionCode.TASK_WORKSPACE_MISMATCH,
                f"task {task.name!r} belongs to workspace {task.workspace_id!r}, "
                f"not {record.workspace_id!r}",
            )
        if record.project_id is None:
            return _missing_level(record, HierarchyLevel.PROJECT)
        if task.project_id != record.project_id:
            return _reject(
                RejectionCode.TASK_PROJECT_MISMATCH,
                f"task {task.name!r} belongs to project {task.project_id!r}, "
                f"not {record.project_id!r}",
            )
    elif record.hierarchy.match_for(HierarchyLevel.TASK).is_unresolved_reference:
        return _missing_level(record, HierarchyLevel.TASK)

    if project is None:
        return _missing_level(record, HierarchyLevel.PROJECT)
    if task is not None and task.project_id != project.id:
        return _reject(
            RejectionCode.TASK_PROJECT_MISMATCH,
            f"project {project.name!r} does not own task {task.name!r}",
        )

    if client is None:
        return _missing_level(record, HierarchyLevel.CLIENT)
    if project.client_id != client.id:
        return _reject(
            RejectionCode.PROJECT_CLIENT_MISMATCH,
            f"project {project.name!r} does not belong to client {client.name!r}",
        )

    if workspace is None:
        return _missing_level(record, HierarchyLevel.WORKSPACE)
    if client.workspace_id != workspace.id:
        return _reject(
            RejectionCode.CLIENT_WORKSPACE_MISMATCH,
            f"client {client.name!r} does not belong to workspace {workspace.name!r}",
        )
    if project.workspace_id != workspace.id:
        return _reject(
            RejectionCode.PROJECT_WORKSPACE_MISMATCH,
            f"project {project.name!r} does not belong to workspace {workspace.name!r}",
        )
    if task is not None and task.workspace_id != workspace.id:
        return _reject(
            RejectionCode.TASK_WORKSPACE_MISMATCH,
            f"task {task.name!r} does not belong to workspace {workspace.name!r}",
        )

    foreign: list[str] = []
    for tag_id in record.tag_ids:
        tag = snapshot.tag(tag_id)
        if tag is None:
            foreign.append(repr(tag_id))
        elif tag.workspace_id != workspace.id:
            foreign.append(tag.name)
    if foreign:
        return _reject(
            RejectionCode.TAG_WORKSPACE_MISMATCH,
            f"tags {foreign} do not belong to workspace {workspace.name!r}",
        )

    if record.duration is None:
        return _reject(
            RejectionCode.DURATION_MISSING,
            "no duration given and none could be derived from start and stop",
        )
    if record.duration < 0:
        return _reject(
            RejectionCode.NEGATIVE_DURATION,
            f"stop is {-record.duration} seconds before start",
        )

    return ACCEPTED
