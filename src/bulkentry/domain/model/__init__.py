"""Time-entry domain model."""

from __future__ import annotations

from .primitives import EntityId, Seconds
from .records import (
    CandidateRecord,
    CreatedEntry,
    HierarchyLevel,
    HierarchyResolution,
    MatchStatus,
    ReferenceMatch,
    ResolvedRecord,
)
from .snapshot import Client, DomainSnapshot, Project, Tag, Task, User, Workspace

__all__ = [
    "CandidateRecord",
    "Client",
    "CreatedEntry",
    "DomainSnapshot",
    "EntityId",
    "HierarchyLevel",
    "HierarchyResolution",
    "MatchStatus",
    "Project",
    "ReferenceMatch",
    "ResolvedRecord",
    "Seconds",
    "Tag",
    "Task",
    "User",
    "Workspace",
]
