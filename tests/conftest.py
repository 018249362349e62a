from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from pocketlibrary.adapters.sqlalchemy import SqlAlchemyRecordStore, create_all_tables, shutdown
from pocketlibrary.domain.reconciliation import ReconciliationEngine
from tests.helpers.books import FakeCatalogClient, FakeMirrorClient, MirrorFailureRecorder

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def record_store(sqlite_session_factory: sessionmaker[Session]) -> SqlAlchemyRecordStore:
    return SqlAlchemyRecordStore(sqlite_session_factory)


@pytest.fixture
def fake_mirror() -> FakeMirrorClient:
    return FakeMirrorClient()


@pytest.fixture
def fake_catalog() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def mirror_failures() -> MirrorFailureRecorder:
    return MirrorFailureRecorder()


@pytest.fixture
def reconciliation_engine(
    record_store: SqlAlchemyRecordStore,
    fake_catalog: FakeCatalogClient,
    fake_mirror: FakeMirrorClient,
    mirror_failures: MirrorFailureRecorder,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        store=record_store,
        catalog=fake_catalog,
        mirror=fake_mirror,
        on_mirror_failure=mirror_failures,
    )


@pytest.fixture
def reset_adapter_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()
