"""Settings for the rate-limited, retrying HTTP client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})
TRANSIENT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)

type CacheBackend = Literal["sqlite", "memory"]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retry transient failures of the listed methods only."""

    attempts: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    methods: frozenset[str] = IDEMPOTENT_METHODS
    statuses: frozenset[int] = TRANSIENT_STATUSES
    exceptions: tuple[type[httpx.HTTPError], ...] = TRANSIENT_ERRORS

    def __post_init__(self) -> None:
        if self.attempts < 0:
            raise ValueError(f"Retry attempts cannot be negative: {self.attempts}")


@dataclass(slots=True, frozen=True)
class RateLimit:
    """Leaky bucket admitting ``max_calls`` every ``per_seconds``."""

    max_calls: int
    per_seconds: float

    def __post_init__(self) -> None:
        if self.max_calls < 1 or self.per_seconds <= 0:
            raise ValueError(f"Invalid rate limit: {self.max_calls} per {self.per_seconds}s")

    @property
    def interval(self) -> float:
        return self.per_seconds / self.max_calls


@dataclass(slots=True, frozen=True)
class CacheConfig:
    backend: CacheBackend = "memory"
    # None means the file under the data directory
    sqlite_path: str | None = None
    ttl_seconds: float | None = 300.0


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    headers: Mapping[str, str] = field(default_factory=dict[str, str])
