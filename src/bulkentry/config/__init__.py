"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_int_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import get_data_dir, get_http_cache_path
from .toggl import TOGGL_BASE_URL, TogglConfig, get_toggl_config, toggl_resilience
from .upload import UploadConfig, get_upload_config

__all__ = [
    "TOGGL_BASE_URL",
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "TogglConfig",
    "UploadConfig",
    "configure_logging",
    "get_data_dir",
    "get_http_cache_path",
    "get_toggl_config",
    "get_upload_config",
    "optional_env_var",
    "optional_int_env_var",
    "require_env_var",
    "require_env_vars",
    "toggl_resilience",
]
