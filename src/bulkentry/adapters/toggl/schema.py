"""Pydantic models describing the Toggl Track API payloads.

Both the v9 field names and the older v8 ones (``wid``, ``cid``, ``pid``,
``default_wid`` and the ``data`` envelope) are accepted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _null_to_empty(value: object) -> object:
    return [] if value is None else value


class TogglBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WorkspacePayload(TogglBaseModel):
    id: int | str
    name: str


class ClientPayload(TogglBaseModel):
    id: int | str
    name: str
    workspace_id: int | str = Field(validation_alias=AliasChoices("workspace_id", "wid"))


class ProjectPayload(TogglBaseModel):
    id: int | str
    name: str
    workspace_id: int | str = Field(validation_alias=AliasChoices("workspace_id", "wid"))
    client_id: int | str | None = Field(
        default=None, validation_alias=AliasChoices("client_id", "cid")
    )


class TaskPayload(TogglBaseModel):
    id: int | str
    name: str
    workspace_id: int | str = Field(validation_alias=AliasChoices("workspace_id", "wid"))
    project_id: int | str = Field(validation_alias=AliasChoices("project_id", "pid"))


class TagPayload(TogglBaseModel):
    id: int | str
    name: str
    workspace_id: int | str = Field(validation_alias=AliasChoices("workspace_id", "wid"))


class MeResponse(TogglBaseModel):
    """``GET /me?with_related_data=true``."""

    id: int | str | None = None
    fullname: str | None = None
    email: str | None = None
    default_workspace_id: int | str | None = Field(
        default=None, validation_alias=AliasChoices("default_workspace_id", "default_wid")
    )
    workspaces: list[WorkspacePayload] = Field(default_factory=list["WorkspacePayload"])
    clients: list[ClientPayload] = Field(default_factory=list["ClientPayload"])
    projects: list[ProjectPayload] = Field(default_factory=list["ProjectPayload"])
    tasks: list[TaskPayload] = Field(default_factory=list["TaskPayload"])
    tags: list[TagPayload] = Field(default_factory=list["TagPayload"])

    _normalize_lists = field_validator(
        "workspaces", "clients", "projects", "tasks", "tags", mode="before"
    )(_null_to_empty)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_data_envelope(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            data = mapping_value.get("data")
            if isinstance(data, Mapping) and "fullname" not in mapping_value:
                return data
        return value


class TimeEntryRequest(TogglBaseModel):
    """Body of ``POST /workspaces/{workspace_id}/time_entries``."""

    created_with: str
    workspace_id: int | str
    description: str | None = None
    billable: bool = False
    start: str | None = None
    stop: str | None = None
    duration: int | None = None
    project_id: int | str | None = None
    task_id: int | str | None = None
    tag_ids: list[int | str] = Field(default_factory=list)


class TimeEntryResponse(TogglBaseModel):
    id: int | str

    @model_validator(mode="before")
    @classmethod
    def _unwrap_data_envelope(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            data = mapping_value.get("data")
            if isinstance(data, Mapping) and "id" not in mapping_value:
                return data
        return value
