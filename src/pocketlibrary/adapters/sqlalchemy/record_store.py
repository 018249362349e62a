"""Record store backed by a SQLAlchemy session factory."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from pocketlibrary.domain.errors import LocalStoreFault
from pocketlibrary.domain.live import LiveQuery, LiveQueryHub

from .mappings import book_table, record_values, row_to_record
from .unit_of_work import SqlAlchemyUnitOfWork, default_session_factory

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import Session, sessionmaker

    from pocketlibrary.domain.model import BookRecord

log = getLogger(__name__)


class SqlAlchemyRecordStore:
    """Durable book table with live queries.

    Writes are serialised through one lock so ``upsert`` and ``remove`` are atomic
    per id; every committed write re-emits all subscribed live queries.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        *,
        hub: LiveQueryHub | None = None,
    ) -> None:
        self._session_factory = session_factory
        self.hub = hub or LiveQueryHub()
        self._write_lock = threading.Lock()

    # Reads -------------------------------------------------------------------

    def get_all(self) -> LiveQuery:
        return self.hub.query(self._fetch_all, description="all books")

    def search(self, substring: str) -> LiveQuery:
        needle = substring.strip().lower()
        return self.hub.query(
            lambda: self._fetch_matching(needle), description=f"search {needle!r}"
        )

    def get_by_id(self, record_id: str) -> BookRecord | None:
        stmt = select(book_table).where(book_table.c.id == record_id)
        with self._unit_of_work("get_by_id") as uow:
            row = uow.session.execute(stmt).one_or_none()
        return row_to_record(row) if row is not None else None

    # Writes ------------------------------------------------------------------

    def upsert(self, record: BookRecord) -> None:
        values = record_values(record)
        with self._write_lock, self._unit_of_work("upsert") as uow:
            session = uow.session
            exists = session.execute(
                select(book_table.c.id).where(book_table.c.id == record.id)
            ).scalar_one_or_none()
            if exists is None:
                position = session.execute(
                    select(func.coalesce(func.max(book_table.c.position), 0) + 1)
                ).scalar_one()
                session.execute(insert(book_table).values(position=position, **values))
            else:
                session.execute(
                    update(book_table).where(book_table.c.id == record.id).values(**values)
                )
            uow.commit()
        log.debug(f"Stored record {record.id}")
        self.hub.notify()

    def remove(self, record: BookRecord) -> None:
        with self._write_lock, self._unit_of_work("remove") as uow:
            result = uow.session.execute(delete(book_table).where(book_table.c.id == record.id))
            uow.commit()
        if result.rowcount:
            log.debug(f"Removed record {record.id}")
            self.hub.notify()

    # Internals ---------------------------------------------------------------

    def _fetch_all(self) -> list[BookRecord]:
        stmt = select(book_table).order_by(book_table.c.position)
        with self._unit_of_work("get_all") as uow:
            return [row_to_record(row) for row in uow.session.execute(stmt)]

    def _fetch_matching(self, needle: str) -> list[BookRecord]:
        if not needle.isascii():
            # SQLite lower() only folds ASCII letters.
            folded = needle.casefold()
            return [
                record
                for record in self._fetch_all()
                if folded in record.title.casefold() or folded in record.author.casefold()
            ]
        stmt = (
            select(book_table)
            .where(
                or_(
                    func.lower(book_table.c.title).contains(needle, autoescape=True),
                    func.lower(book_table.c.author).contains(needle, autoescape=True),
                )
            )
            .order_by(book_table.c.position)
        )
        with self._unit_of_work("search") as uow:
            return [row_to_record(row) for row in uow.session.execute(stmt)]

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[SqlAlchemyUnitOfWork]:
        factory = self._session_factory or default_session_factory()
        try:
            with SqlAlchemyUnitOfWork(factory) as uow:
                yield uow
        except SQLAlchemyError as exc:
            log.error(f"Local store {operation} failed: {exc}")
            raise LocalStoreFault(f"Local store {operation} failed: {exc}") from exc


if TYPE_CHECKING:
    from pocketlibrary.domain.ports import RecordStore

    _store_check: RecordStore = SqlAlchemyRecordStore()
