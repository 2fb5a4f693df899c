"""Read-only snapshot of the authenticated user's Toggl domain.

The snapshot is fetched once per run and shared by every row. Entities are plain
frozen records; relationships are ids resolved through flat lookup tables instead
of object back-pointers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .primitives import EntityId


class NamedEntity(Protocol):
    @property
    def id(self) -> EntityId: ...

    @property
    def name(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Workspace:
    id: EntityId
    name: str


@dataclass(frozen=True, slots=True)
class Client:
    id: EntityId
    name: str
    workspace_id: EntityId


@dataclass(frozen=True, slots=True)
class Project:
    id: EntityId
    name: str
    workspace_id: EntityId
    client_id: EntityId | None = None


@dataclass(frozen=True, slots=True)
class Task:
    id: EntityId
    name: str
    workspace_id: EntityId
    project_id: EntityId


@dataclass(frozen=True, slots=True)
class Tag:
    id: EntityId
    name: str
    workspace_id: EntityId


@dataclass(frozen=True, slots=True)
class User:
    full_name: str | None
    email: str | None
    default_workspace_id: EntityId | None = None


def _index[T: NamedEntity](entities: Iterable[T]) -> dict[EntityId, T]:
    return {entity.id: entity for entity in entities}


@dataclass(frozen=True, slots=True)
class DomainSnapshot:
    """Everything the resolver and validator may consult for one run."""

    user: User
    workspaces: tuple[Workspace, ...] = ()
    clients: tuple[Client, ...] = ()
    projects: tuple[Project, ...] = ()
    tasks: tuple[Task, ...] = ()
    tags: tuple[Tag, ...] = ()
    workspaces_by_id: Mapping[EntityId, Workspace] = field(init=False, repr=False, compare=False)
    clients_by_id: Mapping[EntityId, Client] = field(init=False, repr=False, compare=False)
    projects_by_id: Mapping[EntityId, Project] = field(init=False, repr=False, compare=False)
    tasks_by_id: Mapping[EntityId, Task] = field(init=False, repr=False, compare=False)
    tags_by_id: Mapping[EntityId, Tag] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # frozen dataclass: derived tables are set once here
        object.__setattr__(self, "workspaces_by_id", _index(self.workspaces))
        object.__setattr__(self, "clients_by_id", _index(self.clients))
        object.__setattr__(self, "projects_by_id", _index(self.projects))
        object.__setattr__(self, "tasks_by_id", _index(self.tasks))
        object.__setattr__(self, "tags_by_id", _index(self.tags))

    def workspace(self, entity_id: EntityId | None) -> Workspace | None:
        return None if entity_id is None else self.workspaces_by_id.get(entity_id)

    def client(self, entity_id: EntityId | None) -> Client | None:
        return None if entity_id is None else self.clients_by_id.get(entity_id)

    def project(self, entity_id: EntityId | None) -> Project | None:
        return None if entity_id is None else self.projects_by_id.get(entity_id)

    def task(self, entity_id: EntityId | None) -> Task | None:
        return None if entity_id is None else self.tasks_by_id.get(entity_id)

    def tag(self, entity_id: EntityId | None) -> Tag | None:
        return None if entity_id is None else self.tags_by_id.get(entity_id)
