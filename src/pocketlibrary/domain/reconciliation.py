"""Offline-first reconciliation between the local record store and the mirror.

Every mutation writes the local store first and only then attempts the mirror.
Mirror failures on mutations are reported to an observer and otherwise ignored:
the device may simply be offline. The pull pass is the only recurring
behaviour; it copies records that exist remotely but not locally and never
overwrites a local record.

Known limitation: a record whose mirror write failed is not re-pushed by the
pull pass; it stays local-only until it is saved again.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import RemoteMirrorFault

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from .live import LiveQuery
    from .model import BookRecord
    from .ports import CatalogClient, MirrorClient, RecordStore

type MirrorFailureObserver = Callable[[RemoteMirrorFault], None]

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PullResult:
    """Outcome of one pull pass."""

    fetched: int
    inserted: int
    skipped: int


def _log_mirror_failure(fault: RemoteMirrorFault) -> None:
    log.warning(
        "Mirror %s failed for %s, keeping local copy only: %s",
        fault.operation,
        fault.record_id,
        fault,
    )


class ReconciliationEngine:
    """Coordinates the record store, the catalog and the mirror."""

    def __init__(
        self,
        *,
        store: RecordStore,
        catalog: CatalogClient,
        mirror: MirrorClient,
        on_mirror_failure: MirrorFailureObserver | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.mirror = mirror
        self._on_mirror_failure = on_mirror_failure

    # Reads -------------------------------------------------------------------

    def library(self) -> LiveQuery:
        return self.store.get_all()

    def search_library(self, query: str) -> LiveQuery:
        return self.store.search(query)

    def get_book(self, record_id: str) -> BookRecord | None:
        return self.store.get_by_id(record_id)

    async def search_online(self, query: str) -> list[BookRecord]:
        """Query the catalog; results are not persisted until saved."""

        return await self.catalog.search(query)

    # Mutations ---------------------------------------------------------------

    async def save(self, record: BookRecord) -> None:
        """Persist locally, then mirror best-effort.

        Returns once the local write succeeded. ``LocalStoreFault`` propagates and
        the mirror is not contacted in that case.
        """

        self.store.upsert(record)
        await self._mirror_best_effort("put", record.id, lambda: self.mirror.put(record))

    async def update(self, record: BookRecord) -> None:
        """Full replace by id in both stores (e.g. after attaching a photo)."""

        await self.save(record)

    async def delete(self, record: BookRecord) -> None:
        self.store.remove(record)
        await self._mirror_best_effort(
            "delete", record.id, lambda: self.mirror.delete(record.id)
        )

    # Pull pass ---------------------------------------------------------------

    async def pull_from_mirror(self) -> PullResult:
        """Insert records present in the mirror but missing locally.

        Raises ``RemoteMirrorFault`` when the mirror snapshot cannot be fetched;
        nothing is written locally in that case. Local records always win.
        """

        try:
            remote_records = await self.mirror.get_all()
        except RemoteMirrorFault:
            raise
        except Exception as exc:
            raise RemoteMirrorFault(
                f"Mirror fetch failed: {exc}", operation="get_all"
            ) from exc

        inserted = 0
        skipped = 0
        for record in remote_records:
            if self.store.get_by_id(record.id) is not None:
                skipped += 1
                continue
            self.store.upsert(record)
            inserted += 1

        log.info(
            "Pulled mirror snapshot: fetched=%s, inserted=%s, skipped=%s",
            len(remote_records),
            inserted,
            skipped,
        )
        return PullResult(fetched=len(remote_records), inserted=inserted, skipped=skipped)

    # Internals ---------------------------------------------------------------

    async def _mirror_best_effort(
        self,
        operation: str,
        record_id: str,
        call: Callable[[], Awaitable[None]],
    ) -> None:
        try:
            await call()
        except Exception as exc:  # noqa: BLE001
            fault = (
                exc
                if isinstance(exc, RemoteMirrorFault)
                else RemoteMirrorFault(str(exc), operation=operation, record_id=record_id)
            )
            self._report(fault)

    def _report(self, fault: RemoteMirrorFault) -> None:
        _log_mirror_failure(fault)
        if self._on_mirror_failure is not None:
            self._on_mirror_failure(fault)
