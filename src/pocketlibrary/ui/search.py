"""View model behind the catalog search screen."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pocketlibrary.domain.errors import CatalogFault, LocalStoreFault
from pocketlibrary.domain.model import build_manual_record

if TYPE_CHECKING:
    from pocketlibrary.domain.model import BookRecord
    from pocketlibrary.domain.reconciliation import ReconciliationEngine

log = getLogger(__name__)

NO_RESULTS_MESSAGE = "No book found"
SEARCH_FAILED_MESSAGE = "Search failed. You can add books manually."
SAVE_FAILED_MESSAGE = "Could not save the book on this device."


class SearchViewModel:
    """Holds transient search state; results are only persisted when saved."""

    def __init__(self, engine: ReconciliationEngine, *, query: str = "") -> None:
        self._engine = engine
        self.query = query
        self.results: list[BookRecord] = []
        self.is_loading = False
        self.error_message: str | None = None
        self.saved_ids: frozenset[str] = frozenset()
        self._library = engine.library().subscribe(self._on_library_changed)

    def update_query(self, query: str) -> None:
        self.query = query

    def is_saved(self, record: BookRecord) -> bool:
        return record.id in self.saved_ids

    async def search(self) -> None:
        query = self.query.strip()
        if not query:
            return
        self.is_loading = True
        self.error_message = None
        try:
            books = await self._engine.search_online(query)
        except CatalogFault as exc:
            log.info(f"Catalog search failed: {exc}")
            self.error_message = SEARCH_FAILED_MESSAGE
        else:
            self.results = books
            if not books:
                self.error_message = NO_RESULTS_MESSAGE
        finally:
            self.is_loading = False

    async def save(self, record: BookRecord) -> bool:
        try:
            await self._engine.save(record)
        except LocalStoreFault:
            self.error_message = SAVE_FAILED_MESSAGE
            return False
        return True

    async def add_manual(
        self,
        *,
        title: str,
        author: str,
        year: int | str | None = None,
    ) -> BookRecord | None:
        """Validate and save a manual entry.

        Raises ``ValidationFault`` for missing title/author before anything is
        written; returns ``None`` if the local write failed.
        """

        record = build_manual_record(title=title, author=author, year=year)
        if not await self.save(record):
            return None
        return record

    def close(self) -> None:
        self._library.unsubscribe()

    def _on_library_changed(self, books: list[BookRecord]) -> None:
        self.saved_ids = frozenset(book.id for book in books)
