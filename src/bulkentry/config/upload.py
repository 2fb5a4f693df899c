"""Upload defaults for the CSV import pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import optional_env_var, optional_int_env_var
from .errors import ConfigurationError

DEFAULT_CREATED_WITH = "bulkentry"
DEFAULT_QUEUE_SIZE = 50


@dataclass(frozen=True, slots=True)
class UploadConfig:
    created_with: str = DEFAULT_CREATED_WITH
    queue_size: int = DEFAULT_QUEUE_SIZE
    # None means naive timestamps are read in the machine's local timezone
    timezone: ZoneInfo | None = None


def get_upload_config() -> UploadConfig:
    queue_size = optional_int_env_var("BULKENTRY_QUEUE_SIZE", default=DEFAULT_QUEUE_SIZE)
    if queue_size < 1:
        raise ConfigurationError("BULKENTRY_QUEUE_SIZE must be at least 1")

    tz_name = optional_env_var("BULKENTRY_TIMEZONE")
    timezone: ZoneInfo | None = None
    if tz_name is not None:
        try:
            timezone = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone: {tz_name}") from exc

    return UploadConfig(
        created_with=optional_env_var("BULKENTRY_CREATED_WITH") or DEFAULT_CREATED_WITH,
        queue_size=queue_size,
        timezone=timezone,
    )
