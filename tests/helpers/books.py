"""Reusable fakes and helpers for book-library tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pocketlibrary.domain.errors import LocalStoreFault, RemoteMirrorFault
from pocketlibrary.domain.live import LiveQuery, LiveQueryHub
from pocketlibrary.domain.model import BookRecord
from pocketlibrary.domain.ports import CatalogClient, MirrorClient, RecordStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def make_book(
    record_id: str = "OL27448W",
    *,
    title: str = "The Hobbit",
    author: str = "J.R.R. Tolkien",
    year: int | None = 1937,
    cover_url: str | None = None,
    local_photo_path: str | None = None,
) -> BookRecord:
    return BookRecord(
        id=record_id,
        title=title,
        author=author,
        year=year,
        cover_url=cover_url,
        local_photo_path=local_photo_path,
    )


class FakeMirrorClient(MirrorClient):
    """In-memory mirror that records every call and can be told to fail."""

    def __init__(
        self,
        records: Iterable[BookRecord] = (),
        *,
        fail_put: bool = False,
        fail_delete: bool = False,
        fail_get_all: bool = False,
        put_error: Exception | None = None,
    ) -> None:
        self.documents: dict[str, BookRecord] = {record.id: record for record in records}
        self.fail_put = fail_put
        self.fail_delete = fail_delete
        self.fail_get_all = fail_get_all
        self.put_error = put_error
        self.put_calls: list[BookRecord] = []
        self.delete_calls: list[str] = []
        self.get_all_calls = 0

    async def put(self, record: BookRecord) -> None:
        self.put_calls.append(record)
        if self.put_error is not None:
            raise self.put_error
        if self.fail_put:
            raise RemoteMirrorFault("mirror offline", operation="put", record_id=record.id)
        self.documents[record.id] = record

    async def delete(self, record_id: str) -> None:
        self.delete_calls.append(record_id)
        if self.fail_delete:
            raise RemoteMirrorFault("mirror offline", operation="delete", record_id=record_id)
        self.documents.pop(record_id, None)

    async def get_all(self) -> list[BookRecord]:
        self.get_all_calls += 1
        if self.fail_get_all:
            raise RemoteMirrorFault("mirror offline", operation="get_all")
        return list(self.documents.values())


class FakeCatalogClient(CatalogClient):
    def __init__(
        self,
        results: Mapping[str, list[BookRecord]] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.results: dict[str, list[BookRecord]] = dict(results or {})
        self.error = error
        self.calls: list[str] = []

    async def search(self, query: str) -> list[BookRecord]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results.get(query, []))


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed record store; ``fail_writes`` simulates a broken disk."""

    def __init__(self, records: Iterable[BookRecord] = (), *, fail_writes: bool = False) -> None:
        self.records: dict[str, BookRecord] = {record.id: record for record in records}
        self.fail_writes = fail_writes
        self.hub = LiveQueryHub()

    def get_all(self) -> LiveQuery:
        return self.hub.query(lambda: list(self.records.values()))

    def search(self, substring: str) -> LiveQuery:
        needle = substring.lower()
        return self.hub.query(
            lambda: [
                record
                for record in self.records.values()
                if needle in record.title.lower() or needle in record.author.lower()
            ]
        )

    def get_by_id(self, record_id: str) -> BookRecord | None:
        return self.records.get(record_id)

    def upsert(self, record: BookRecord) -> None:
        if self.fail_writes:
            raise LocalStoreFault("disk full")
        self.records[record.id] = record
        self.hub.notify()

    def remove(self, record: BookRecord) -> None:
        if self.fail_writes:
            raise LocalStoreFault("disk full")
        if self.records.pop(record.id, None) is not None:
            self.hub.notify()


class MirrorFailureRecorder:
    def __init__(self) -> None:
        self.faults: list[RemoteMirrorFault] = []

    def __call__(self, fault: RemoteMirrorFault) -> None:
        self.faults.append(fault)
