"""Open Library catalog configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import int_env_var, optional_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

OPENLIBRARY_BASE_URL = "https://openlibrary.org/"
OPENLIBRARY_SEARCH_PATH = "search.json"
OPENLIBRARY_COVER_URL_TEMPLATE = "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg"
OPENLIBRARY_SEARCH_FIELDS = ("key", "title", "author_name", "first_publish_year", "cover_i")
OPENLIBRARY_TIMEOUT_SECONDS = 10.0
DEFAULT_SEARCH_LIMIT = 20


def _default_resilience(base_url: str = OPENLIBRARY_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="openlibrary",
        base_url=base_url,
        timeout_seconds=OPENLIBRARY_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=2),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


@dataclass(frozen=True)
class OpenLibraryConfig:
    """Holds catalog search configuration values."""

    base_url: str = OPENLIBRARY_BASE_URL
    search_path: str = OPENLIBRARY_SEARCH_PATH
    fields: tuple[str, ...] = OPENLIBRARY_SEARCH_FIELDS
    limit: int = DEFAULT_SEARCH_LIMIT
    cover_url_template: str = OPENLIBRARY_COVER_URL_TEMPLATE
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_openlibrary_config(*, resilience: ResilienceConfig | None = None) -> OpenLibraryConfig:
    base_url = optional_env_var("POCKETLIBRARY_CATALOG_URL") or OPENLIBRARY_BASE_URL
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    limit = int_env_var("POCKETLIBRARY_CATALOG_LIMIT", default=DEFAULT_SEARCH_LIMIT)
    if limit <= 0:
        raise ConfigurationError("POCKETLIBRARY_CATALOG_LIMIT must be positive")
    return OpenLibraryConfig(
        base_url=base_url,
        limit=limit,
        resilience=resilience or _default_resilience(base_url),
    )
