"""Shared fixtures for Toggl adapter tests."""

from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from bulkentry.adapters.http_resilience import ResilientClient
from bulkentry.config import RateLimit, ResilienceConfig, RetryPolicy, TogglConfig

BASE_URL = "https://toggl.test/api/v9"

type Handler = Callable[[httpx.Request], httpx.Response]
type ClientFactory = Callable[[ResilienceConfig, httpx.Auth], ResilientClient]


def make_client_factory(handler: Handler) -> ClientFactory:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig, auth: httpx.Auth) -> ResilientClient:
        client = ResilientClient(resilience, auth=auth)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            base_url=BASE_URL,
            auth=auth,
        )
        return client

    return factory


def make_toggl_config(*, ratelimit: RateLimit | None = None) -> TogglConfig:
    return TogglConfig(
        api_token="secret-token",  # noqa: S106
        resilience=ResilienceConfig(
            name="toggl-test",
            base_url=BASE_URL,
            ratelimit=ratelimit,
            retry=RetryPolicy(attempts=0),
            cache=None,
        ),
    )


@pytest.fixture
def toggl_config() -> TogglConfig:
    return make_toggl_config()


@pytest.fixture
def client_factory() -> Callable[[Handler], ClientFactory]:
    return make_client_factory
