"""Domain model and services for the book library core."""

from __future__ import annotations

from .errors import (
    CatalogFault,
    LibraryError,
    LocalStoreFault,
    RemoteMirrorFault,
    ValidationFault,
)
from .live import LiveQuery, LiveQueryHub, Subscription
from .model import (
    MANUAL_ID_PREFIX,
    UNKNOWN_AUTHOR,
    BookRecord,
    build_manual_record,
    catalog_record_id,
    is_manual_id,
    manual_record_id,
)
from .reconciliation import MirrorFailureObserver, PullResult, ReconciliationEngine

__all__ = [
    "MANUAL_ID_PREFIX",
    "UNKNOWN_AUTHOR",
    "BookRecord",
    "CatalogFault",
    "LibraryError",
    "LiveQuery",
    "LiveQueryHub",
    "LocalStoreFault",
    "MirrorFailureObserver",
    "PullResult",
    "ReconciliationEngine",
    "RemoteMirrorFault",
    "Subscription",
    "ValidationFault",
    "build_manual_record",
    "catalog_record_id",
    "is_manual_id",
    "manual_record_id",
]
