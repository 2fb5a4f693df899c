"""Per-row records flowing through the resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .primitives import EntityId, Seconds


class HierarchyLevel(StrEnum):
    WORKSPACE = "workspace"
    CLIENT = "client"
    PROJECT = "project"
    TASK = "task"


class MatchStatus(StrEnum):
    """How one hierarchy level was (or was not) resolved."""

    ABSENT = "absent"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    RESOLVED = "resolved"
    INFERRED = "inferred"


@dataclass(frozen=True, slots=True)
class ReferenceMatch:
    reference: object | None
    status: MatchStatus
    candidates: int = 0

    @property
    def is_unresolved_reference(self) -> bool:
        return self.status in {MatchStatus.NOT_FOUND, MatchStatus.AMBIGUOUS}


@dataclass(frozen=True, slots=True)
class HierarchyResolution:
    workspace_id: EntityId | None = None
    client_id: EntityId | None = None
    project_id: EntityId | None = None
    task_id: EntityId | None = None
    matches: dict[HierarchyLevel, ReferenceMatch] = field(
        default_factory=dict[HierarchyLevel, ReferenceMatch], compare=False
    )

    def match_for(self, level: HierarchyLevel) -> ReferenceMatch:
        return self.matches.get(level, ReferenceMatch(None, MatchStatus.ABSENT))


@dataclass(slots=True, kw_only=True)
class CandidateRecord:
    """A raw row's values, picked out by logical field but not yet resolved."""

    full_name: str | None = None
    email: str | None = None
    workspace: str | int | None = None
    client: str | int | None = None
    project: str | int | None = None
    task: str | int | None = None
    description: str | None = None
    billable: bool = False
    start: datetime | None = None
    stop: datetime | None = None
    duration: Seconds | None = None
    tag_names: tuple[str, ...] = ()


@dataclass(slots=True, kw_only=True)
class ResolvedRecord:
    """Candidate with references replaced by snapshot identifiers."""

    full_name: str | None = None
    email: str | None = None
    workspace_id: EntityId | None = None
    client_id: EntityId | None = None
    project_id: EntityId | None = None
    task_id: EntityId | None = None
    description: str | None = None
    billable: bool = False
    start: datetime | None = None
    stop: datetime | None = None
    duration: Seconds | None = None
    tag_ids: tuple[EntityId, ...] = ()
    unmatched_tags: tuple[str, ...] = ()
    hierarchy: HierarchyResolution = field(default_factory=HierarchyResolution)


@dataclass(frozen=True, slots=True)
class CreatedEntry:
    id: EntityId
