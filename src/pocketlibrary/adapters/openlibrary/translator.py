"""Translate Open Library search documents into book records."""

from __future__ import annotations

from logging import getLogger

from pocketlibrary.config.openlibrary import OPENLIBRARY_COVER_URL_TEMPLATE
from pocketlibrary.domain.model import UNKNOWN_AUTHOR, BookRecord, catalog_record_id

from .schema import SearchDoc, SearchDocInput

log = getLogger(__name__)


def _ensure_search_doc(doc: SearchDocInput) -> SearchDoc:
    if isinstance(doc, SearchDoc):
        return doc
    return SearchDoc.model_validate(doc)


def cover_url_for(
    cover_id: int | None,
    *,
    template: str = OPENLIBRARY_COVER_URL_TEMPLATE,
) -> str | None:
    if cover_id is None:
        return None
    return template.format(cover_id=cover_id)


def parse_search_doc(
    doc: SearchDocInput,
    *,
    cover_url_template: str = OPENLIBRARY_COVER_URL_TEMPLATE,
) -> BookRecord | None:
    """Map one search hit to a record, or ``None`` when it has no usable key/title."""

    payload = _ensure_search_doc(doc)
    if payload.key is None or payload.title is None:
        return None
    try:
        record_id = catalog_record_id(payload.key)
    except ValueError:
        log.debug("Dropping catalog entry with unusable key %r", payload.key)
        return None
    return BookRecord(
        id=record_id,
        title=payload.title,
        author=payload.first_author or UNKNOWN_AUTHOR,
        year=payload.first_publish_year,
        cover_url=cover_url_for(payload.cover_i, template=cover_url_template),
    )


def parse_search_docs(
    docs: list[SearchDoc],
    *,
    cover_url_template: str = OPENLIBRARY_COVER_URL_TEMPLATE,
) -> list[BookRecord]:
    records: list[BookRecord] = []
    for doc in docs:
        record = parse_search_doc(doc, cover_url_template=cover_url_template)
        if record is not None:
            records.append(record)
    return records
