"""HTTP client for the Open Library search API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from pocketlibrary.adapters.http_resilience import ResilientClient, default_client_factory
from pocketlibrary.config.openlibrary import OpenLibraryConfig
from pocketlibrary.domain.errors import CatalogFault

from .schema import SearchResponse
from .translator import parse_search_docs

if TYPE_CHECKING:
    from collections.abc import Callable

    from pocketlibrary.config.http_resilience import ResilienceConfig
    from pocketlibrary.domain.model import BookRecord

log = getLogger(__name__)


@dataclass(slots=True)
class OpenLibraryCatalogClient:
    config: OpenLibraryConfig = field(default_factory=OpenLibraryConfig)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    async def search(self, query: str) -> list[BookRecord]:
        params = httpx.QueryParams(
            {
                "q": query,
                "fields": ",".join(self.config.fields),
                "limit": self.config.limit,
            }
        )
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await self._perform_request(client=client, params=params)
        except httpx.HTTPError as exc:
            log.warning(f"Catalog search for {query!r} failed: {exc}")
            raise CatalogFault(f"Catalog search failed: {exc}", query=query) from exc

        records = parse_search_docs(
            response.docs, cover_url_template=self.config.cover_url_template
        )
        log.debug(f"Catalog search for {query!r} returned {len(records)} of {len(response.docs)}")
        return records

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        params: httpx.QueryParams,
    ) -> SearchResponse:
        url = httpx.URL(self.config.base_url).join(self.config.search_path)
        response = await client.get(url, params=params)
        response.raise_for_status()

        query = params.get("q", "")
        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogFault("Catalog returned invalid JSON", query=query) from exc
        if not isinstance(payload, dict):
            raise CatalogFault("Unexpected catalog response payload", query=query)
        try:
            return SearchResponse.model_validate(payload)
        except ValidationError as exc:
            raise CatalogFault(f"Catalog payload did not validate: {exc}", query=query) from exc


if TYPE_CHECKING:
    from pocketlibrary.domain.ports import CatalogClient

    _catalog_check: CatalogClient = OpenLibraryCatalogClient()
