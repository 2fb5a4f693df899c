"""Map tag names from a row onto snapshot tags scoped to the resolved workspace."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import DomainSnapshot, EntityId

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TagResolution:
    tag_ids: tuple[EntityId, ...] = ()
    unmatched: tuple[str, ...] = ()


def _tag_key(name: str) -> str:
    return name.strip().casefold()


def resolve_tags(
    tag_names: Sequence[str],
    workspace_id: EntityId | None,
    snapshot: DomainSnapshot,
) -> TagResolution:
    """Return ids of snapshot tags named in ``tag_names``.

    With an unknown workspace, matching is by name only and the validator is left to
    reject tags from a foreign workspace.
    """

    unique_names = list(dict.fromkeys(tag_names))
    wanted = {_tag_key(name) for name in unique_names}
    found: set[str] = set()
    tag_ids: list[EntityId] = []
    for tag in snapshot.tags:
        key = _tag_key(tag.name)
        if key not in wanted:
            continue
        if workspace_id is not None and tag.workspace_id != workspace_id:
            continue
        tag_ids.append(tag.id)
        found.add(key)

    unmatched = tuple(name for name in unique_names if _tag_key(name) not in found)
    if unmatched:
        log.warning("Ignoring unknown tags %s for workspace %s", list(unmatched), workspace_id)
    return TagResolution(tag_ids=tuple(tag_ids), unmatched=unmatched)
