"""Domain primitives: scalar aliases shared by the time-entry model."""

from __future__ import annotations

type EntityId = int | str
type Seconds = int
