"""Location of files bulkentry keeps between runs."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "bulkentry"
HTTP_CACHE_FILENAME: Final[str] = "toggl_http_cache.db"


def get_data_dir() -> Path:
    """Return ``$BULKENTRY_DATA_DIR`` or the XDG data directory for bulkentry."""

    override = optional_env_var("BULKENTRY_DATA_DIR")
    if override is not None:
        return Path(override).expanduser().resolve()
    xdg_home = optional_env_var("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home is not None else Path.home() / ".local" / "share"
    return (base / APP_DIR_NAME).expanduser().resolve()


def get_http_cache_path(*, ensure: bool = True) -> Path:
    data_dir = get_data_dir()
    if ensure:
        data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / HTTP_CACHE_FILENAME
