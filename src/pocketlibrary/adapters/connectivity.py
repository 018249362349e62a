"""Network connectivity probes used to gate background work."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from pocketlibrary.config.http_resilience import NO_RETRY, ResilienceConfig

from .http_resilience import ResilientClient, default_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_SECONDS = 5.0


async def always_connected() -> bool:
    return True


@dataclass(slots=True)
class HttpConnectivityProbe:
    """Treats any HTTP response from ``url`` as connected."""

    url: str
    timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    async def __call__(self) -> bool:
        config = ResilienceConfig(
            name="connectivity",
            timeout_seconds=self.timeout_seconds,
            retry=NO_RETRY,
        )
        try:
            async with self.client_factory(config) as client:
                await client.head(self.url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.debug(f"Connectivity probe to {self.url} failed: {exc}")
            return False
        return True


if TYPE_CHECKING:
    from pocketlibrary.domain.ports import ConnectivityProbe

    _probe_check: ConnectivityProbe = HttpConnectivityProbe("https://example.org/")
