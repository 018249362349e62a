"""Public interface for the remote mirror adapter."""

from __future__ import annotations

from .client import HttpMirrorClient
from .schema import BookDocument, DocumentListResponse
from .translator import parse_document, parse_documents, to_document

__all__ = [
    "BookDocument",
    "DocumentListResponse",
    "HttpMirrorClient",
    "parse_document",
    "parse_documents",
    "to_document",
]
