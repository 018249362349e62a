"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import RecordStore
from .remote import CatalogClient, MirrorClient
from .scheduling import ConnectivityProbe, PeriodicJob, PeriodicScheduler

__all__ = [
    "CatalogClient",
    "ConnectivityProbe",
    "MirrorClient",
    "PeriodicJob",
    "PeriodicScheduler",
    "RecordStore",
]
