"""Ports for reading the domain snapshot and input rows."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bulkentry.domain.model import DomainSnapshot

type RowSource = Iterable[Mapping[str, str]]


class SnapshotError(RuntimeError):
    """Raised when the fetched snapshot cannot support any resolution."""


@runtime_checkable
class SnapshotFetcher(Protocol):
    """Port returning the authenticated user's workspaces, clients, projects, tasks, tags."""

    async def fetch_snapshot(self) -> DomainSnapshot: ...


__all__ = ["RowSource", "SnapshotError", "SnapshotFetcher"]
