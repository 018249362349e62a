"""Remote mirror configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import NO_RETRY, ResilienceConfig

DEFAULT_COLLECTION = "books"
MIRROR_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class MirrorConfig:
    """Holds remote document store configuration values."""

    base_url: str
    resilience: ResilienceConfig
    collection: str = DEFAULT_COLLECTION
    api_token: str | None = None

    def collection_path(self) -> str:
        return self.collection.strip("/")


def get_mirror_config(*, resilience: ResilienceConfig | None = None) -> MirrorConfig:
    values = require_env_vars(("POCKETLIBRARY_MIRROR_URL",))
    base_url = values["POCKETLIBRARY_MIRROR_URL"]
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    token = optional_env_var("POCKETLIBRARY_MIRROR_TOKEN")
    headers = {"Authorization": f"Bearer {token}"} if token else None
    return MirrorConfig(
        base_url=base_url,
        collection=optional_env_var("POCKETLIBRARY_MIRROR_COLLECTION") or DEFAULT_COLLECTION,
        api_token=token,
        resilience=resilience
        or ResilienceConfig(
            name="mirror",
            base_url=base_url,
            timeout_seconds=MIRROR_TIMEOUT_SECONDS,
            # Mirror writes are best-effort; the pull pass is the only retry path.
            retry=NO_RETRY,
            default_headers=headers,
        ),
    )
