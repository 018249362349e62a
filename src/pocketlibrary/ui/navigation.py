"""Route helpers for screens addressed by book id."""

from __future__ import annotations

from urllib.parse import quote, unquote

DETAIL_ROUTE_PREFIX = "detail/"


def detail_route(book_id: str) -> str:
    return f"{DETAIL_ROUTE_PREFIX}{quote(book_id, safe='')}"


def decode_book_id(encoded_id: str | None) -> str | None:
    if encoded_id is None:
        return None
    if encoded_id.startswith(DETAIL_ROUTE_PREFIX):
        encoded_id = encoded_id[len(DETAIL_ROUTE_PREFIX) :]
    return unquote(encoded_id)
