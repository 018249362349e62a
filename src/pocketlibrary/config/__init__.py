"""Application configuration helpers."""

from __future__ import annotations

from .env import int_env_var, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRY, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .mirror import MirrorConfig, get_mirror_config
from .openlibrary import OpenLibraryConfig, get_openlibrary_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import MIN_SYNC_INTERVAL_MINUTES, SYNC_TASK_NAME, SyncConfig, get_sync_config

__all__ = [
    "MIN_SYNC_INTERVAL_MINUTES",
    "NO_RETRY",
    "SYNC_TASK_NAME",
    "ConfigurationError",
    "DatabaseConfig",
    "MirrorConfig",
    "MissingConfigurationError",
    "OpenLibraryConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_database_config",
    "get_mirror_config",
    "get_openlibrary_config",
    "get_storage_config",
    "get_sync_config",
    "int_env_var",
    "optional_env_var",
    "require_env_vars",
]
