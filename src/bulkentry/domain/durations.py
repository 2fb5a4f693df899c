"""Duration, timestamp and flag parsing for raw row values.

Unparsable input yields ``None`` rather than an error: a malformed cell is an
expected data problem that the validator reports, not a fault.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

_WHOLE_SECONDS = re.compile(r"[0-9]+")
_CLOCK_DURATION = re.compile(r"([0-9]{1,2}):([0-9]{1,2}):([0-9]{1,2})")
_TRUTHY_FLAG = re.compile(r"^\s*(true|yes|y|1)\s*$", re.IGNORECASE)
_TAG_SEPARATOR = re.compile(r"[,|]")


def parse_duration(value: object) -> int | None:
    """Convert ``"90"``, ``90`` or ``"1:02:03"`` into whole seconds."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if not isinstance(value, str) or not value:
        return None
    if _WHOLE_SECONDS.fullmatch(value):
        return int(value)
    match = _CLOCK_DURATION.fullmatch(value)
    if match is None:
        return None
    hours, minutes, seconds = (int(part) for part in match.groups())
    return seconds + 60 * minutes + 3600 * hours


def parse_timestamp(
    date_value: str | None,
    time_value: str | None = None,
    *,
    tz: tzinfo | None = None,
) -> datetime | None:
    """Combine a date cell and optional time cell into an aware datetime.

    Naive values are read in ``tz``, or in the local timezone when ``tz`` is None.
    """

    if date_value is None or not date_value.strip():
        return None
    text = date_value.strip()
    if time_value is not None and time_value.strip():
        text = f"{text} {time_value.strip()}"
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz) if tz is not None else parsed.astimezone()
    return parsed


def effective_duration(
    start: datetime | None,
    stop: datetime | None,
    parsed_duration: int | None,
) -> int | None:
    """Prefer the span between start and stop over an explicit duration cell."""

    if start is not None and stop is not None:
        return round((stop - start).total_seconds())
    return parsed_duration


def parse_billable(value: str | None) -> bool:
    return value is not None and _TRUTHY_FLAG.match(value) is not None


def split_tag_names(value: str | None) -> tuple[str, ...]:
    """Split ``"a, b|c"`` into unique, non-blank names in input order."""

    if not value:
        return ()
    names: list[str] = []
    for part in _TAG_SEPARATOR.split(value):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)
