from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from bulkentry.domain.hierarchy import filter_by_reference, matches_reference, resolve_hierarchy
from bulkentry.domain.model import (
    CandidateRecord,
    HierarchyLevel,
    MatchStatus,
    Workspace,
)

if TYPE_CHECKING:
    from bulkentry.domain.model import DomainSnapshot, HierarchyResolution


def _ids(resolution: HierarchyResolution) -> tuple[object, object, object, object]:
    return (
        resolution.workspace_id,
        resolution.client_id,
        resolution.project_id,
        resolution.task_id,
    )


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        (7, True),
        ("7", True),
        ("Seven", True),
        ("seven", False),
        (8, False),
        (True, False),
        (None, False),
    ],
)
def test_matches_reference(reference: object, *, expected: bool) -> None:
    assert matches_reference(Workspace(id=7, name="Seven"), reference) is expected


def test_filter_by_reference_without_reference_is_empty(snapshot: DomainSnapshot) -> None:
    assert filter_by_reference(snapshot.clients, None) == ()
    assert len(filter_by_reference(snapshot.clients, "Shared")) == 2


def test_full_ids_are_returned_unchanged(snapshot: DomainSnapshot) -> None:
    candidate = CandidateRecord(workspace="1", client="10", project="100", task="1000")

    resolution = resolve_hierarchy(candidate, snapshot)

    assert _ids(resolution) == (1, 10, 100, 1000)
    assert all(
        resolution.match_for(level).status is MatchStatus.RESOLVED for level in HierarchyLevel
    )


def test_integer_ids_are_returned_unchanged(snapshot: DomainSnapshot) -> None:
    candidate = CandidateRecord(workspace=2, client=12, project=102, task=1003)

    assert _ids(resolve_hierarchy(candidate, snapshot)) == (2, 12, 102, 1003)


@pytest.mark.parametrize(
    ("task", "expected"),
    [
        ("T1", (1, 10, 100, 1000)),
        ("1000", (1, 10, 100, 1000)),
        ("1003", (2, 12, 102, 1003)),
    ],
)
def test_task_alone_fills_the_ownership_chain(
    snapshot: DomainSnapshot, task: str, expected: tuple[int, int, int, int]
) -> None:
    resolution = resolve_hierarchy(CandidateRecord(task=task), snapshot)

    assert _ids(resolution) == expected
    assert resolution.match_for(HierarchyLevel.TASK).status is MatchStatus.RESOLVED
    assert resolution.match_for(HierarchyLevel.PROJECT).status is MatchStatus.INFERRED
    assert resolution.match_for(HierarchyLevel.CLIENT).status is MatchStatus.INFERRED
    assert resolution.match_for(HierarchyLevel.WORKSPACE).status is MatchStatus.INFERRED


def test_project_without_client_leaves_client_unresolved(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(project="NoClient"), snapshot)

    assert _ids(resolution) == (1, None, 105, None)
    assert resolution.match_for(HierarchyLevel.CLIENT).status is MatchStatus.ABSENT


def test_ambiguous_project_is_never_guessed(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(project="Dup"), snapshot)

    assert resolution.project_id is None
    assert resolution.client_id is None
    match = resolution.match_for(HierarchyLevel.PROJECT)
    assert match.status is MatchStatus.AMBIGUOUS
    assert match.candidates == 2


def test_client_narrows_ambiguous_project(snapshot: DomainSnapshot) -> None:
    candidate = CandidateRecord(project="Dup", client="OtherClient")

    resolution = resolve_hierarchy(candidate, snapshot)

    assert _ids(resolution) == (1, 11, 104, None)
    assert resolution.match_for(HierarchyLevel.PROJECT).status is MatchStatus.INFERRED


def test_project_narrows_ambiguous_task(snapshot: DomainSnapshot) -> None:
    candidate = CandidateRecord(task="Review", project="P2")

    resolution = resolve_hierarchy(candidate, snapshot)

    assert _ids(resolution) == (1, 11, 101, 1002)


def test_ambiguous_task_alone_stays_unresolved(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(task="Review"), snapshot)

    assert resolution.task_id is None
    assert resolution.project_id is None
    assert resolution.match_for(HierarchyLevel.TASK).status is MatchStatus.AMBIGUOUS


def test_project_resolves_ambiguous_client_among_its_matches(snapshot: DomainSnapshot) -> None:
    candidate = CandidateRecord(client="Shared", project="Shared Project")

    assert _ids(resolve_hierarchy(candidate, snapshot)) == (1, 13, 106, None)


def test_inference_does_not_override_a_conflicting_reference(snapshot: DomainSnapshot) -> None:
    # P1 belongs to C1, which is not one of the clients named "Shared"
    resolution = resolve_hierarchy(CandidateRecord(client="Shared", project="P1"), snapshot)

    assert resolution.client_id is None
    assert resolution.match_for(HierarchyLevel.CLIENT).status is MatchStatus.AMBIGUOUS


def test_unknown_workspace_reference_takes_the_owner_workspace(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(workspace="Typo", project="P3"), snapshot)

    assert _ids(resolution) == (2, 12, 102, None)
    assert resolution.match_for(HierarchyLevel.WORKSPACE).status is MatchStatus.INFERRED


def test_unknown_workspace_reference_falls_back_to_default(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(workspace="Typo"), snapshot)

    assert resolution.workspace_id == 1


def test_ambiguous_workspace_is_not_replaced_by_an_outside_owner(
    snapshot: DomainSnapshot,
) -> None:
    resolution = resolve_hierarchy(CandidateRecord(workspace="Team", project="P1"), snapshot)

    assert resolution.workspace_id is None
    assert resolution.match_for(HierarchyLevel.WORKSPACE).status is MatchStatus.AMBIGUOUS
    assert resolution.match_for(HierarchyLevel.WORKSPACE).candidates == 2


def test_workspace_prefers_client_owner(snapshot: DomainSnapshot) -> None:
    candidate = CandidateRecord(client="C3", project="P1")

    resolution = resolve_hierarchy(candidate, snapshot)

    # conflicting owners are left for the validator to reject
    assert resolution.workspace_id == 2


def test_default_workspace_fills_empty_row(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(), snapshot)

    assert _ids(resolution) == (1, None, None, None)
    assert resolution.match_for(HierarchyLevel.WORKSPACE).status is MatchStatus.INFERRED


def test_explicit_workspace_is_kept_even_if_it_conflicts(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(workspace="W2", project="P1"), snapshot)

    assert _ids(resolution) == (2, 10, 100, None)


def test_case_sensitive_names_do_not_match(snapshot: DomainSnapshot) -> None:
    resolution = resolve_hierarchy(CandidateRecord(task="t1"), snapshot)

    assert resolution.task_id is None
    assert resolution.match_for(HierarchyLevel.TASK).status is MatchStatus.NOT_FOUND
