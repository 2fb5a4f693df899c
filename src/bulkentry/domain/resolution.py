"""Turn a candidate record into a resolved record."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .hierarchy import resolve_hierarchy
from .model import ResolvedRecord
from .tags import resolve_tags

if TYPE_CHECKING:
    from .model import CandidateRecord, DomainSnapshot


def resolve_record(candidate: CandidateRecord, snapshot: DomainSnapshot) -> ResolvedRecord:
    hierarchy = resolve_hierarchy(candidate, snapshot)
    tags = resolve_tags(candidate.tag_names, hierarchy.workspace_id, snapshot)
    return ResolvedRecord(
        full_name=candidate.full_name,
        email=candidate.email,
        workspace_id=hierarchy.workspace_id,
        client_id=hierarchy.client_id,
        project_id=hierarchy.project_id,
        task_id=hierarchy.task_id,
        description=candidate.description,
        billable=candidate.billable,
        start=candidate.start,
        stop=candidate.stop,
        duration=candidate.duration,
        tag_ids=tags.tag_ids,
        unmatched_tags=tags.unmatched,
        hierarchy=hierarchy,
    )
