"""Resolve workspace/client/project/task references against the domain snapshot.

Rows may name an entity, give its id, or leave the column out entirely. Each level
is matched independently first; a level is resolved only when exactly one entity
matches. Missing levels are then inferred from the ones present:

1. task from the resolved project (narrowing the row's task matches)
2. project from the resolved task's owner
3. client from the resolved project's client
4. project from the resolved client (narrowing the row's project matches)
5. workspace from the client, then project, then task
6. workspace from the user's default workspace

An inferred id must be one of the row's own matches when the row names that level.
The one exception is an unknown workspace name, which steps 5 and 6 replace.
Ambiguity is never guessed. It stays unresolved and fails validation later.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .model import HierarchyLevel, HierarchyResolution, MatchStatus, ReferenceMatch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import CandidateRecord, DomainSnapshot, EntityId
    from .model.snapshot import NamedEntity

log = getLogger(__name__)


def matches_reference(entity: NamedEntity, reference: object) -> bool:
    """Return whether ``reference`` names ``entity`` by id or exact name."""

    if isinstance(reference, bool):
        return False
    if isinstance(reference, int):
        return reference >= 0 and reference == entity.id
    if isinstance(reference, str):
        # CSV cells are text, so an id arrives as its decimal string
        return reference == entity.name or reference == str(entity.id)
    return False


def filter_by_reference[T: NamedEntity](entities: Iterable[T], reference: object) -> tuple[T, ...]:
    if reference is None:
        return ()
    return tuple(entity for entity in entities if matches_reference(entity, reference))


@dataclass
class _Level[T: NamedEntity]:
    matches: tuple[T, ...]
    match: ReferenceMatch
    resolved_id: EntityId | None

    @classmethod
    def from_reference(cls, entities: Iterable[T], reference: object) -> _Level[T]:
        matches = filter_by_reference(entities, reference)
        if reference is None:
            status = MatchStatus.ABSENT
        elif not matches:
            status = MatchStatus.NOT_FOUND
        elif len(matches) == 1:
            status = MatchStatus.RESOLVED
        else:
            status = MatchStatus.AMBIGUOUS
        resolved_id = matches[0].id if status is MatchStatus.RESOLVED else None
        return cls(matches, ReferenceMatch(reference, status, len(matches)), resolved_id)

    def accepts(self, entity_id: EntityId) -> bool:
        """An inferred id must agree with any reference the row gave for this level."""
        if self.match.status is MatchStatus.ABSENT:
            return True
        return any(entity.id == entity_id for entity in self.matches)

    def infer(self, entity_id: EntityId, *, replace_unknown: bool = False) -> None:
        unknown = replace_unknown and self.match.status is MatchStatus.NOT_FOUND
        if not unknown and not self.accepts(entity_id):
            return
        self.resolved_id = entity_id
        self.match = ReferenceMatch(self.match.reference, MatchStatus.INFERRED, len(self.matches))


def resolve_hierarchy(candidate: CandidateRecord, snapshot: DomainSnapshot) -> HierarchyResolution:
    """Compute ids for all four hierarchy levels, each possibly ``None``."""

    task = _Level.from_reference(snapshot.tasks, candidate.task)
    project = _Level.from_reference(snapshot.projects, candidate.project)
    client = _Level.from_reference(snapshot.clients, candidate.client)
    workspace = _Level.from_reference(snapshot.workspaces, candidate.workspace)

    if task.resolved_id is None and project.resolved_id is not None:
        narrowed = [t for t in task.matches if t.project_id == project.resolved_id]
        if len(narrowed) == 1:
            task.infer(narrowed[0].id)

    if project.resolved_id is None and task.resolved_id is not None:
        owner = snapshot.task(task.resolved_id)
        if owner is not None and snapshot.project(owner.project_id) is not None:
            project.infer(owner.project_id)

    if client.resolved_id is None and project.resolved_id is not None:
        owner = snapshot.project(project.resolved_id)
        if owner is not None and owner.client_id is not None:
            if snapshot.client(owner.client_id) is not None:
                client.infer(owner.client_id)

    if project.resolved_id is None and client.resolved_id is not None:
        narrowed = [p for p in project.matches if p.client_id == client.resolved_id]
        if len(narrowed) == 1:
            project.infer(narrowed[0].id)

    if workspace.resolved_id is None:
        owners = (
            snapshot.client(client.resolved_id),
            snapshot.project(project.resolved_id),
            snapshot.task(task.resolved_id),
        )
        candidate_ids = [owner.workspace_id for owner in owners if owner is not None]
        inferred = _first_known_workspace(snapshot, candidate_ids)
        if inferred is None:
            inferred = snapshot.user.default_workspace_id
        if inferred is not None:
            workspace.infer(inferred, replace_unknown=True)

    resolution = HierarchyResolution(
        workspace_id=workspace.resolved_id,
        client_id=client.resolved_id,
        project_id=project.resolved_id,
        task_id=task.resolved_id,
        matches={
            HierarchyLevel.WORKSPACE: workspace.match,
            HierarchyLevel.CLIENT: client.match,
            HierarchyLevel.PROJECT: project.match,
            HierarchyLevel.TASK: task.match,
        },
    )
    log.debug(
        "Resolved hierarchy: workspace=%s client=%s project=%s task=%s",
        resolution.workspace_id,
        resolution.client_id,
        resolution.project_id,
        resolution.task_id,
    )
    return resolution


def _first_known_workspace(
    snapshot: DomainSnapshot,
    workspace_ids: list[EntityId],
) -> EntityId | None:
    for workspace_id in workspace_ids:
        if snapshot.workspace(workspace_id) is not None:
            return workspace_id
    return None
