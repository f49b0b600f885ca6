"""Shared test fixtures.

- SQLite database per test (aiosqlite) with SAVEPOINT support
- Service-level session fixture
- HTTP client against the FastAPI app with the session factory patched in
"""

import importlib
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from storyhub.db import base as db_base
from storyhub.db.init_db import create_tables
from storyhub.services.media_storage_service import MediaStorageService


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with the schema created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'storyhub.db'}",
        echo=False,
    )

    # pysqlite/aiosqlite emit their own BEGIN, which breaks SAVEPOINT handling
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session shared by the whole test (one transaction)."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def media_storage(tmp_path, monkeypatch) -> MediaStorageService:
    """Media storage writing under tmp_path, swapped into every caller."""
    storage = MediaStorageService(upload_dir=str(tmp_path / "uploads"), url_prefix="/uploads")
    # package __init__ rebinds submodule names to service instances; patch the modules themselves
    for module_name in ("storyhub.services.scene_service", "storyhub.api.v1.story"):
        monkeypatch.setattr(importlib.import_module(module_name), "media_storage_service", storage)
    return storage


@pytest_asyncio.fixture
async def client(session_factory, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client; each request gets its own committed/rolled-back session."""
    from storyhub.app import app

    monkeypatch.setattr(db_base, "AsyncSessionLocal", session_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
