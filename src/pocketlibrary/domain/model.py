"""Book record value object and identifier helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Final

from .errors import ValidationFault

UNKNOWN_AUTHOR: Final[str] = "Unknown"
MANUAL_ID_PREFIX: Final[str] = "manual_"
WORK_KEY_PREFIX: Final[str] = "/works/"


@dataclass(frozen=True, slots=True)
class BookRecord:
    """Immutable snapshot of a saved book.

    Updates are expressed as full replacements, e.g. ``record.with_photo(path)``.
    """

    id: str
    title: str
    author: str = UNKNOWN_AUTHOR
    year: int | None = None
    cover_url: str | None = None
    local_photo_path: str | None = None

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("BookRecord.id must be non-empty")
        if not self.title or not self.title.strip():
            raise ValueError("BookRecord.title must be non-blank")

    @property
    def display_image(self) -> str | None:
        return self.local_photo_path or self.cover_url

    @property
    def is_manual(self) -> bool:
        return is_manual_id(self.id)

    def with_photo(self, path: str | None) -> BookRecord:
        return replace(self, local_photo_path=path)


def is_manual_id(record_id: str) -> bool:
    return record_id.startswith(MANUAL_ID_PREFIX)


def catalog_record_id(work_key: str) -> str:
    """Derive a stable record id from a catalog work key.

    ``/works/OL27448W`` becomes ``OL27448W``; remaining path separators are
    replaced with underscores so the id is safe as a document key.
    """

    derived = work_key.strip().replace(WORK_KEY_PREFIX, "").replace("/", "_")
    if not derived:
        raise ValueError(f"Cannot derive a record id from catalog key {work_key!r}")
    if is_manual_id(derived):
        raise ValueError(f"Catalog key {work_key!r} collides with the manual id space")
    return derived


def manual_record_id(*, now: datetime | None = None) -> str:
    """Generate a synthetic id for a manually entered book."""

    moment = now or datetime.now(tz=UTC)
    millis = int(moment.timestamp() * 1000)
    return f"{MANUAL_ID_PREFIX}{millis}_{uuid.uuid4().hex[:8]}"


def _parse_year(value: int | str | None) -> int | None:
    if value is None or isinstance(value, int):
        return value
    stripped = value.strip()
    if not stripped:
        return None
    if not stripped.isdigit():
        raise ValidationFault(f"Year must contain digits only, got {value!r}", field="year")
    return int(stripped)


def build_manual_record(
    *,
    title: str,
    author: str,
    year: int | str | None = None,
    now: datetime | None = None,
) -> BookRecord:
    """Validate a manual entry and turn it into a record.

    Title and author are required; blank values raise ``ValidationFault`` so the
    entry never reaches the reconciliation engine.
    """

    clean_title = title.strip()
    clean_author = author.strip()
    if not clean_title:
        raise ValidationFault("Title is required", field="title")
    if not clean_author:
        raise ValidationFault("Author is required", field="author")
    return BookRecord(
        id=manual_record_id(now=now),
        title=clean_title,
        author=clean_author,
        year=_parse_year(year),
        cover_url=None,
    )
