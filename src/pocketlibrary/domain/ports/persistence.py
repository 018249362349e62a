"""Port for the local record store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pocketlibrary.domain.live import LiveQuery
    from pocketlibrary.domain.model import BookRecord


@runtime_checkable
class RecordStore(Protocol):
    """Durable keyed table of book records; the authoritative copy.

    Implementations raise ``LocalStoreFault`` on storage failures and serialise
    writes per id.
    """

    def get_all(self) -> LiveQuery: ...

    def search(self, substring: str) -> LiveQuery: ...

    def get_by_id(self, record_id: str) -> BookRecord | None: ...

    def upsert(self, record: BookRecord) -> None: ...

    def remove(self, record: BookRecord) -> None: ...
