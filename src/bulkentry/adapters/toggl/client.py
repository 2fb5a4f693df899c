"""HTTP client for the Toggl Track API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from bulkentry.adapters.http_resilience import ResilientClient
from bulkentry.config.upload import DEFAULT_CREATED_WITH
from bulkentry.domain.model import CreatedEntry

from .schema import MeResponse, TimeEntryResponse
from .translator import translate_snapshot, translate_time_entry

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from bulkentry.config.http_resilience import ResilienceConfig
    from bulkentry.config.toggl import TogglConfig
    from bulkentry.domain.model import DomainSnapshot, ResolvedRecord

log = getLogger(__name__)

type ClientFactory = Callable[[ResilienceConfig, httpx.Auth], ResilientClient]


class TogglAPIError(RuntimeError):
    """Raised when the Toggl API rejects a request or returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ResilienceConfig, auth: httpx.Auth) -> ResilientClient:
    return ResilientClient(config, auth=auth)


class TogglClient:
    """Snapshot source and time-entry sink backed by one rate-limited connection.

    Use as an async context manager; every call shares the client's limiter so
    create calls never exceed the configured rate.
    """

    def __init__(
        self,
        *,
        config: TogglConfig,
        created_with: str = DEFAULT_CREATED_WITH,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._created_with = created_with
        # Toggl uses the API token as the basic-auth user with a fixed password
        auth = httpx.BasicAuth(config.api_token, "api_token")
        self._client = (client_factory or _default_client_factory)(config.resilience, auth)

    async def __aenter__(self) -> TogglClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_snapshot(self) -> DomainSnapshot:
        response = await self._client.get("me", params={"with_related_data": "true"})
        payload = self._json_or_raise(response, action="fetch user data")
        try:
            me = MeResponse.model_validate(payload)
        except ValidationError as exc:
            raise TogglAPIError(f"Unexpected Toggl user payload: {exc}") from exc
        snapshot = translate_snapshot(me)
        log.info(
            "Fetched Toggl data: workspaces=%s, clients=%s, projects=%s, tasks=%s, tags=%s",
            len(snapshot.workspaces),
            len(snapshot.clients),
            len(snapshot.projects),
            len(snapshot.tasks),
            len(snapshot.tags),
        )
        return snapshot

    async def create_time_entry(self, record: ResolvedRecord) -> CreatedEntry:
        request = translate_time_entry(record, created_with=self._created_with)
        response = await self._client.post(
            f"workspaces/{request.workspace_id}/time_entries",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        payload = self._json_or_raise(response, action="create time entry")
        try:
            created = TimeEntryResponse.model_validate(payload)
        except ValidationError as exc:
            raise TogglAPIError(f"Unexpected Toggl time entry payload: {exc}") from exc
        return CreatedEntry(id=created.id)

    async def __call__(self, record: ResolvedRecord) -> CreatedEntry:
        return await self.create_time_entry(record)

    @staticmethod
    def _json_or_raise(response: httpx.Response, *, action: str) -> object:
        if response.is_error:
            detail = response.text.strip() or response.reason_phrase
            log.error(f"Toggl API error {response.status_code} while trying to {action}: {detail}")
            raise TogglAPIError(
                f"Failed to {action}: HTTP {response.status_code} {detail}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TogglAPIError(f"Failed to {action}: response is not JSON") from exc
