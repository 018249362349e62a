"""Convert between book records and mirror documents."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pocketlibrary.domain.model import BookRecord

from .schema import BookDocument

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)


def to_document(record: BookRecord) -> dict[str, object]:
    document = BookDocument(
        id=record.id,
        title=record.title,
        author=record.author,
        year=record.year,
        cover_url=record.cover_url,
        local_photo_path=record.local_photo_path,
    )
    return document.model_dump(by_alias=True)


def parse_document(payload: object) -> BookRecord:
    document = BookDocument.model_validate(payload)
    return BookRecord(
        id=document.id,
        title=document.title,
        author=document.author,
        year=document.year,
        cover_url=document.cover_url,
        local_photo_path=document.local_photo_path,
    )


def parse_documents(payloads: Iterable[object]) -> list[BookRecord]:
    """Parse a snapshot, skipping documents that do not describe a valid record."""

    records: list[BookRecord] = []
    for payload in payloads:
        try:
            records.append(parse_document(payload))
        except ValueError as exc:
            log.warning(f"Skipping undecodable mirror document: {exc}")
    return records
