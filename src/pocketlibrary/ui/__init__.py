"""Presentation-layer view models consuming the reconciliation engine."""

from __future__ import annotations

from .details import BookDetailViewModel, ShareMessage, build_share_message
from .library import LibraryViewModel
from .navigation import decode_book_id, detail_route
from .search import SearchViewModel

__all__ = [
    "BookDetailViewModel",
    "LibraryViewModel",
    "SearchViewModel",
    "ShareMessage",
    "build_share_message",
    "decode_book_id",
    "detail_route",
]
