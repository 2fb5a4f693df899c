"""Public interface for the Toggl Track adapter."""

from __future__ import annotations

from .client import TogglAPIError, TogglClient
from .schema import MeResponse, TimeEntryRequest, TimeEntryResponse
from .translator import translate_snapshot, translate_time_entry

__all__ = [
    "MeResponse",
    "TimeEntryRequest",
    "TimeEntryResponse",
    "TogglAPIError",
    "TogglClient",
    "translate_snapshot",
    "translate_time_entry",
]
