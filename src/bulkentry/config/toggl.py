"""Toggl Track configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

TOGGL_BASE_URL = "https://api.track.toggl.com/api/v9"
TOGGL_TIMEOUT_SECONDS = 30.0
# Toggl's leaky bucket admits roughly one request per second per token
TOGGL_RATE_LIMIT = RateLimit(max_calls=1, per_seconds=1.0)

_CACHE_CHOICES: dict[str, CacheConfig | None] = {
    "memory": CacheConfig(backend="memory"),
    "sqlite": CacheConfig(backend="sqlite"),
    "off": None,
}


def toggl_resilience(
    base_url: str = TOGGL_BASE_URL,
    *,
    cache: CacheConfig | None = _CACHE_CHOICES["memory"],
) -> ResilienceConfig:
    """Client settings for Toggl: paced to the API's rate, with only reads retried.

    A failed create call must surface to the caller instead of being repeated.
    """

    return ResilienceConfig(
        name="toggl",
        base_url=base_url,
        timeout_seconds=TOGGL_TIMEOUT_SECONDS,
        ratelimit=TOGGL_RATE_LIMIT,
        retry=RetryPolicy(methods=frozenset({"GET"})),
        cache=cache,
        headers={"Content-Type": "application/json"},
    )


@dataclass(frozen=True)
class TogglConfig:
    """Holds Toggl API configuration values."""

    api_token: str
    resilience: ResilienceConfig

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or TOGGL_BASE_URL


def _cache_from_env() -> CacheConfig | None:
    choice = (optional_env_var("BULKENTRY_HTTP_CACHE") or "memory").lower()
    if choice not in _CACHE_CHOICES:
        options = ", ".join(_CACHE_CHOICES)
        raise ConfigurationError(f"BULKENTRY_HTTP_CACHE must be one of {options}, got {choice!r}")
    return _CACHE_CHOICES[choice]


def get_toggl_config(
    *,
    api_token: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> TogglConfig:
    token = api_token or require_env_var("TOGGL_API_TOKEN")
    if resilience is None:
        base_url = optional_env_var("TOGGL_BASE_URL") or TOGGL_BASE_URL
        resilience = toggl_resilience(base_url.rstrip("/"), cache=_cache_from_env())
    return TogglConfig(api_token=token, resilience=resilience)
