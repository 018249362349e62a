"""Ports for the remote catalog and the remote mirror."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pocketlibrary.domain.model import BookRecord


@runtime_checkable
class CatalogClient(Protocol):
    """Read-only book search service.

    ``search`` raises ``CatalogFault`` when the call fails as a whole.
    """

    async def search(self, query: str) -> list[BookRecord]: ...


@runtime_checkable
class MirrorClient(Protocol):
    """Remote document store keyed by record id.

    Every method is one round trip and raises ``RemoteMirrorFault`` on failure.
    """

    async def put(self, record: BookRecord) -> None: ...

    async def delete(self, record_id: str) -> None: ...

    async def get_all(self) -> list[BookRecord]: ...
