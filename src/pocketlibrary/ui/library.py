"""View model behind the saved-books screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pocketlibrary.domain.errors import LocalStoreFault

if TYPE_CHECKING:
    from pocketlibrary.domain.live import Subscription
    from pocketlibrary.domain.model import BookRecord
    from pocketlibrary.domain.reconciliation import ReconciliationEngine

DELETE_FAILED_MESSAGE = "Could not remove the book from this device."


class LibraryViewModel:
    """Live list of saved books, optionally filtered by a local search query.

    Changing the query drops the previous subscription, so only the latest
    query's results are ever shown.
    """

    def __init__(self, engine: ReconciliationEngine) -> None:
        self._engine = engine
        self.query = ""
        self.books: list[BookRecord] = []
        self.error_message: str | None = None
        self._subscription: Subscription = engine.library().subscribe(self._on_books)

    @property
    def is_empty(self) -> bool:
        return not self.books

    def update_query(self, query: str) -> None:
        self.query = query
        self._subscription.unsubscribe()
        live = self._engine.search_library(query) if query else self._engine.library()
        self._subscription = live.subscribe(self._on_books)

    async def delete(self, record: BookRecord) -> bool:
        try:
            await self._engine.delete(record)
        except LocalStoreFault:
            self.error_message = DELETE_FAILED_MESSAGE
            return False
        return True

    def close(self) -> None:
        self._subscription.unsubscribe()

    def _on_books(self, books: list[BookRecord]) -> None:
        self.books = books
