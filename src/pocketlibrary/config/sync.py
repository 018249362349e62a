"""Background synchronisation defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import int_env_var, optional_env_var
from .errors import ConfigurationError

SYNC_TASK_NAME = "book_sync"
MIN_SYNC_INTERVAL_MINUTES = 15
DEFAULT_SYNC_INTERVAL_MINUTES = MIN_SYNC_INTERVAL_MINUTES
DEFAULT_CONNECTIVITY_URL = "https://openlibrary.org/"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    task_name: str = SYNC_TASK_NAME
    interval_minutes: int = DEFAULT_SYNC_INTERVAL_MINUTES
    connectivity_url: str = DEFAULT_CONNECTIVITY_URL

    @property
    def interval_seconds(self) -> float:
        return self.interval_minutes * 60.0


def get_sync_config() -> SyncConfig:
    interval = int_env_var(
        "POCKETLIBRARY_SYNC_INTERVAL_MINUTES", default=DEFAULT_SYNC_INTERVAL_MINUTES
    )
    if interval < MIN_SYNC_INTERVAL_MINUTES:
        raise ConfigurationError(
            f"Sync interval must be at least {MIN_SYNC_INTERVAL_MINUTES} minutes, got {interval}"
        )
    return SyncConfig(
        interval_minutes=interval,
        connectivity_url=optional_env_var("POCKETLIBRARY_CONNECTIVITY_URL")
        or DEFAULT_CONNECTIVITY_URL,
    )
