"""Field lookup for rows whose column headers vary in casing, spacing and wording."""

from __future__ import annotations

import re
import unicodedata
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

_SEPARATORS = re.compile(r"[\W_]+")


class LogicalField(StrEnum):
    FULL_NAME = "full_name"
    EMAIL = "email"
    WORKSPACE = "workspace"
    CLIENT = "client"
    PROJECT = "project"
    TASK = "task"
    DESCRIPTION = "description"
    BILLABLE = "billable"
    START_DATE = "start_date"
    START_TIME = "start_time"
    STOP_DATE = "stop_date"
    STOP_TIME = "stop_time"
    DURATION = "duration"
    TAGS = "tags"


# Ordered by priority: the first alias present in a row wins.
FIELD_ALIASES: Mapping[LogicalField, tuple[str, ...]] = {
    LogicalField.FULL_NAME: ("User",),
    LogicalField.EMAIL: ("Email",),
    LogicalField.WORKSPACE: ("Workspace",),
    LogicalField.CLIENT: ("Client",),
    LogicalField.PROJECT: ("Project",),
    LogicalField.TASK: ("Task",),
    LogicalField.DESCRIPTION: ("Description",),
    LogicalField.BILLABLE: ("Billable",),
    LogicalField.START_DATE: ("Start date", "Start"),
    LogicalField.START_TIME: ("Start time",),
    LogicalField.STOP_DATE: ("End date", "Stop date", "End", "Stop"),
    LogicalField.STOP_TIME: ("End time", "Stop time"),
    LogicalField.DURATION: ("Duration",),
    LogicalField.TAGS: ("Tags",),
}


def normalize_label(label: str) -> str:
    """Fold a header or alias into a compact case-insensitive key.

    ``"Start date"``, ``"start_date"``, ``"START-DATE"`` and ``"StartDate"`` all
    become ``"startdate"``.
    """

    text = unicodedata.normalize("NFKC", label).casefold()
    return _SEPARATORS.sub("", text)


def resolve_field[V](row: Mapping[str, V], candidate_names: Sequence[str]) -> V | None:
    """Return the value of the first column matching ``candidate_names`` in priority order."""

    columns: dict[str, str] = {}
    for header in row:
        # the first of several equivalent headers wins
        columns.setdefault(normalize_label(header), header)

    for name in candidate_names:
        header = columns.get(normalize_label(name))
        if header is not None:
            return row[header]
    return None


def resolve_logical_field[V](row: Mapping[str, V], logical_field: LogicalField) -> V | None:
    return resolve_field(row, FIELD_ALIASES[logical_field])
