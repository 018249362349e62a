"""View model behind the book detail screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pocketlibrary.domain.errors import LocalStoreFault

if TYPE_CHECKING:
    from pocketlibrary.domain.model import BookRecord
    from pocketlibrary.domain.reconciliation import ReconciliationEngine

DEFAULT_CONTACT_NAME = "friend"
UPDATE_FAILED_MESSAGE = "Could not update the book on this device."


@dataclass(frozen=True, slots=True)
class ShareMessage:
    recipient: str
    subject: str
    text: str


def build_share_message(record: BookRecord, *, contact_name: str | None = None) -> ShareMessage:
    year = str(record.year) if record.year is not None else "Unknown year"
    text = "\n".join(
        (
            "Check out this book!",
            "",
            record.title,
            f"by {record.author}",
            year,
            "",
            "Shared via Pocket Library",
        )
    )
    return ShareMessage(
        recipient=(contact_name or "").strip() or DEFAULT_CONTACT_NAME,
        subject=f"Book Recommendation: {record.title}",
        text=text,
    )


class BookDetailViewModel:
    def __init__(self, engine: ReconciliationEngine) -> None:
        self._engine = engine
        self.book: BookRecord | None = None
        self.error_message: str | None = None

    def load(self, record_id: str) -> BookRecord | None:
        self.book = self._engine.get_book(record_id)
        return self.book

    async def attach_photo(self, path: str) -> BookRecord | None:
        """Replace the loaded record with a copy that carries ``path``."""

        if self.book is None:
            return None
        updated = self.book.with_photo(path)
        try:
            await self._engine.update(updated)
        except LocalStoreFault:
            self.error_message = UPDATE_FAILED_MESSAGE
            return None
        self.book = updated
        return updated

    def share_message(self, contact_name: str | None = None) -> ShareMessage | None:
        if self.book is None:
            return None
        return build_share_message(self.book, contact_name=contact_name)
