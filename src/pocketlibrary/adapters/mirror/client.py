"""HTTP client for the remote document mirror.

The mirror is a plain keyed JSON document collection::

    PUT    {base_url}{collection}/{id}   body: flat book document
    DELETE {base_url}{collection}/{id}
    GET    {base_url}{collection}        -> [document, ...] or {"documents": [...]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from pocketlibrary.adapters.http_resilience import ResilientClient, default_client_factory
from pocketlibrary.config.mirror import MirrorConfig, get_mirror_config
from pocketlibrary.domain.errors import RemoteMirrorFault

from .schema import DocumentListResponse
from .translator import parse_documents, to_document

if TYPE_CHECKING:
    from collections.abc import Callable

    from pocketlibrary.config.http_resilience import ResilienceConfig
    from pocketlibrary.domain.model import BookRecord

log = getLogger(__name__)


@dataclass(slots=True)
class HttpMirrorClient:
    config: MirrorConfig = field(default_factory=get_mirror_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    async def put(self, record: BookRecord) -> None:
        url = self._document_url(record.id)
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.put(url, json=to_document(record))
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RemoteMirrorFault(
                f"Mirror put failed: {exc}", operation="put", record_id=record.id
            ) from exc
        log.debug(f"Mirrored record {record.id}")

    async def delete(self, record_id: str) -> None:
        url = self._document_url(record_id)
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.delete(url)
                if response.status_code == httpx.codes.NOT_FOUND:
                    log.debug(f"Mirror had no document for {record_id}")
                    return
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RemoteMirrorFault(
                f"Mirror delete failed: {exc}", operation="delete", record_id=record_id
            ) from exc

    async def get_all(self) -> list[BookRecord]:
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.get(self._collection_url())
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            raise RemoteMirrorFault(f"Mirror fetch failed: {exc}", operation="get_all") from exc
        except ValueError as exc:
            raise RemoteMirrorFault("Mirror returned invalid JSON", operation="get_all") from exc

        try:
            listing = DocumentListResponse.model_validate(payload)
        except ValidationError as exc:
            raise RemoteMirrorFault(
                f"Unexpected mirror listing payload: {exc}", operation="get_all"
            ) from exc
        return parse_documents(listing.documents)

    def _collection_url(self) -> httpx.URL:
        return httpx.URL(self.config.base_url).join(self.config.collection_path())

    def _document_url(self, record_id: str) -> httpx.URL:
        collection = self.config.collection_path()
        return httpx.URL(self.config.base_url).join(f"{collection}/{quote(record_id, safe='')}")


if TYPE_CHECKING:
    from pocketlibrary.domain.ports import MirrorClient

    _mirror_check: MirrorClient = HttpMirrorClient()
