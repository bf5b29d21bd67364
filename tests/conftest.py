"""pytest fixtures shared across all tests."""

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from dcinventory.models.base import Base
from dcinventory.services.audit import ChangeLogSink
from dcinventory.services.ipam import IpamService
from dcinventory.services.racks import RackService

# Use SQLite in-memory for tests; no PostgreSQL required.
# Each test function gets its own fresh DB to avoid cross-test pollution.
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Create a fresh in-memory SQLite engine per test function."""
    eng = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Yield an async session bound to the test engine."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sink(session_factory):
    return ChangeLogSink(session_factory)


@pytest_asyncio.fixture
async def ipam(sink):
    return IpamService(sink, batch_size=16)


@pytest_asyncio.fixture
async def rack_service(sink):
    return RackService(sink)


@pytest_asyncio.fixture
async def client(session_factory, sink):
    """HTTPX async test client wired to the FastAPI app with a test DB."""
    from dcinventory.api.app import create_app
    from dcinventory.api.dependencies import get_change_log_sink, get_db

    app = create_app()

    async def override_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_change_log_sink] = lambda: sink

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
