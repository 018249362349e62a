"""Public interface for the Open Library catalog adapter."""

from __future__ import annotations

from .client import OpenLibraryCatalogClient
from .schema import SearchDoc, SearchDocInput, SearchResponse
from .translator import cover_url_for, parse_search_doc, parse_search_docs

__all__ = [
    "OpenLibraryCatalogClient",
    "SearchDoc",
    "SearchDocInput",
    "SearchResponse",
    "cover_url_for",
    "parse_search_doc",
    "parse_search_docs",
]
