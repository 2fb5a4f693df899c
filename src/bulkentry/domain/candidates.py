"""Build candidate records from raw rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .durations import (
    effective_duration,
    parse_billable,
    parse_duration,
    parse_timestamp,
    split_tag_names,
)
from .fields import LogicalField, resolve_logical_field
from .model import CandidateRecord

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import tzinfo


def _cell(row: Mapping[str, str | None], logical_field: LogicalField) -> str | None:
    value = resolve_logical_field(row, logical_field)
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def build_candidate(
    row: Mapping[str, str | None],
    *,
    tz: tzinfo | None = None,
) -> CandidateRecord:
    """Pick every logical field out of ``row`` without consulting the snapshot."""

    start = parse_timestamp(
        _cell(row, LogicalField.START_DATE),
        _cell(row, LogicalField.START_TIME),
        tz=tz,
    )
    stop = parse_timestamp(
        _cell(row, LogicalField.STOP_DATE),
        _cell(row, LogicalField.STOP_TIME),
        tz=tz,
    )
    duration = effective_duration(start, stop, parse_duration(_cell(row, LogicalField.DURATION)))

    return CandidateRecord(
        full_name=_cell(row, LogicalField.FULL_NAME),
        email=_cell(row, LogicalField.EMAIL),
        workspace=_cell(row, LogicalField.WORKSPACE),
        client=_cell(row, LogicalField.CLIENT),
        project=_cell(row, LogicalField.PROJECT),
        task=_cell(row, LogicalField.TASK),
        description=_cell(row, LogicalField.DESCRIPTION),
        billable=parse_billable(_cell(row, LogicalField.BILLABLE)),
        start=start,
        stop=stop,
        duration=duration,
        tag_names=split_tag_names(_cell(row, LogicalField.TAGS)),
    )
