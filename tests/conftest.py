from __future__ import annotations

import json
from pathlib import Path

import pytest

from bulkentry.domain.model import (
    Client,
    DomainSnapshot,
    Project,
    Tag,
    Task,
    User,
    Workspace,
)

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(scope="session")
def me_payload() -> dict[str, object]:
    return json.loads((DATA_DIR / "toggl" / "me.json").read_text())


@pytest.fixture
def snapshot() -> DomainSnapshot:
    """Two workspaces with a few deliberately duplicated names."""

    return DomainSnapshot(
        user=User(full_name="Jane Doe", email="jane@example.com", default_workspace_id=1),
        workspaces=(
            Workspace(id=1, name="W1"),
            Workspace(id=2, name="W2"),
            Workspace(id=3, name="Team"),
            Workspace(id=4, name="Team"),
        ),
        clients=(
            Client(id=10, name="C1", workspace_id=1),
            Client(id=11, name="OtherClient", workspace_id=1),
            Client(id=12, name="C3", workspace_id=2),
            Client(id=13, name="Shared", workspace_id=1),
            Client(id=14, name="Shared", workspace_id=2),
        ),
        projects=(
            Project(id=100, name="P1", workspace_id=1, client_id=10),
            Project(id=101, name="P2", workspace_id=1, client_id=11),
            Project(id=102, name="P3", workspace_id=2, client_id=12),
            Project(id=103, name="Dup", workspace_id=1, client_id=10),
            Project(id=104, name="Dup", workspace_id=1, client_id=11),
            Project(id=105, name="NoClient", workspace_id=1),
            Project(id=106, name="Shared Project", workspace_id=1, client_id=13),
        ),
        tasks=(
            Task(id=1000, name="T1", workspace_id=1, project_id=100),
            Task(id=1001, name="Review", workspace_id=1, project_id=100),
            Task(id=1002, name="Review", workspace_id=1, project_id=101),
            Task(id=1003, name="T3", workspace_id=2, project_id=102),
        ),
        tags=(
            Tag(id=5000, name="billable-work", workspace_id=1),
            Tag(id=5001, name="Urgent", workspace_id=1),
            Tag(id=5002, name="Urgent", workspace_id=2),
        ),
    )
