"""Application wiring and background entry points."""

from __future__ import annotations

import logging
from logging import getLogger
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pocketlibrary.adapters.connectivity import HttpConnectivityProbe
from pocketlibrary.adapters.mirror import HttpMirrorClient
from pocketlibrary.adapters.openlibrary import OpenLibraryCatalogClient
from pocketlibrary.adapters.scheduler import PeriodicTaskScheduler
from pocketlibrary.adapters.sqlalchemy import SqlAlchemyRecordStore, is_started, startup
from pocketlibrary.config import (
    configure_logging,
    get_mirror_config,
    get_openlibrary_config,
    get_sync_config,
)
from pocketlibrary.domain.reconciliation import ReconciliationEngine

if TYPE_CHECKING:
    from pocketlibrary.config import SyncConfig
    from pocketlibrary.domain.ports import CatalogClient, MirrorClient, RecordStore
    from pocketlibrary.domain.reconciliation import MirrorFailureObserver, PullResult


log = getLogger(__name__)


def bootstrap(*, load_env: bool = True, log_level: int = logging.INFO) -> None:
    """Load ``.env`` values and configure logging for an embedding host."""

    if load_env:
        load_dotenv()
    configure_logging(level=log_level)


def build_engine(
    *,
    store: RecordStore | None = None,
    catalog: CatalogClient | None = None,
    mirror: MirrorClient | None = None,
    on_mirror_failure: MirrorFailureObserver | None = None,
    database_uri: str | None = None,
) -> ReconciliationEngine:
    """Assemble a reconciliation engine, defaulting to the configured adapters."""

    if store is None:
        if not is_started():
            startup(database_uri=database_uri)
        store = SqlAlchemyRecordStore()
    return ReconciliationEngine(
        store=store,
        catalog=catalog or OpenLibraryCatalogClient(config=get_openlibrary_config()),
        mirror=mirror or HttpMirrorClient(config=get_mirror_config()),
        on_mirror_failure=on_mirror_failure,
    )


async def pull_from_mirror(engine: ReconciliationEngine) -> PullResult:
    """Background entry point: heal the local store from the mirror snapshot."""

    log.info("Starting mirror pull")
    result = await engine.pull_from_mirror()
    log.info(
        f"Finished mirror pull: fetched={result.fetched}, inserted={result.inserted}, "
        f"skipped={result.skipped}"
    )
    return result


def schedule_mirror_pull(
    engine: ReconciliationEngine,
    *,
    scheduler: PeriodicTaskScheduler | None = None,
    sync_config: SyncConfig | None = None,
) -> PeriodicTaskScheduler:
    """Register the periodic pull; re-registering an existing task is a no-op.

    Must be called from a running event loop.
    """

    config = sync_config or get_sync_config()
    effective_scheduler = scheduler or PeriodicTaskScheduler(
        connectivity=HttpConnectivityProbe(config.connectivity_url)
    )

    async def job() -> PullResult:
        return await pull_from_mirror(engine)

    registered = effective_scheduler.enqueue_unique_periodic(
        config.task_name,
        interval_seconds=config.interval_seconds,
        job=job,
    )
    if not registered:
        log.info(f"Mirror pull task {config.task_name!r} already scheduled")
    return effective_scheduler
