"""SQLAlchemy table metadata for the local record store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, MetaData, String, Table

from pocketlibrary.domain.model import BookRecord

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine, Row

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

book_table = Table(
    "books",
    metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False),
    Column("author", String, nullable=False),
    Column("year", Integer, nullable=True),
    Column("cover_url", String, nullable=True),
    Column("local_photo_path", String, nullable=True),
    # insertion order; kept stable when a record is replaced
    Column("position", Integer, nullable=False, index=True),
)


def record_values(record: BookRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "title": record.title,
        "author": record.author,
        "year": record.year,
        "cover_url": record.cover_url,
        "local_photo_path": record.local_photo_path,
    }


def row_to_record(row: Row[tuple[object, ...]]) -> BookRecord:
    mapping = row._mapping  # noqa: SLF001
    return BookRecord(
        id=mapping["id"],
        title=mapping["title"],
        author=mapping["author"],
        year=mapping["year"],
        cover_url=mapping["cover_url"],
        local_photo_path=mapping["local_photo_path"],
    )


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the library metadata."""

    log.info("Creating library tables")
    metadata.create_all(engine)
