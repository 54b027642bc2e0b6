"""Pytest configuration and fixtures for ALS tests.

Provides a file-backed local store per test, an optional cloud mirror on a
SQLite file (aiosqlite), an "offline" cloud whose tables are missing so every
remote call fails, and an HTTP client bound to the app.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from als.config import settings
from als.database import create_cloud_tables
from als.deps import get_storage
from als.main import app
from als.schemas.driver import Driver
from als.schemas.party import Customer, Port
from als.services.storage import StorageFacade
from als.store.local import FileLocalStore, RedisLocalStore


# ── Local store ──────────────────────────────────────────────────

@pytest.fixture
def local_store(tmp_path) -> FileLocalStore:
    return FileLocalStore(tmp_path / "store")


@pytest.fixture
def storage(local_store) -> StorageFacade:
    """Local-only facade (no cloud configured)."""
    return StorageFacade(local_store)


# ── Cloud mirror ─────────────────────────────────────────────────

@pytest_asyncio.fixture
async def cloud_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cloud.db'}")
    await create_cloud_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def cloud_sessionmaker(cloud_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(cloud_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def cloud_storage(local_store, cloud_sessionmaker) -> StorageFacade:
    return StorageFacade(local_store, cloud_sessionmaker)


@pytest_asyncio.fixture
async def offline_storage(local_store, tmp_path) -> AsyncGenerator[StorageFacade, None]:
    """Facade whose cloud database has no tables: every remote call fails."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield StorageFacade(
        local_store,
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
    )
    await engine.dispose()


# ── HTTP client ──────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(storage) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the storage dependency bound to the local-only facade."""
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Data Fixtures ───────────────────────────────────────────

@pytest_asyncio.fixture
async def driver(storage) -> Driver:
    return await storage.save_driver(Driver(
        name="JOÃO DA SILVA",
        cpf="123.456.789-01",
        phone="(13) 99123-4567",
        plate_horse="ABC-1D23",
        plate_trailer="XYZ-9K87",
    ))


@pytest_asyncio.fixture
async def customer(storage) -> Customer:
    return await storage.save_customer(Customer(
        name="VOLKSWAGEN",
        legal_name="VOLKSWAGEN DO BRASIL LTDA",
        cnpj="59.104.422/0001-50",
        city="SÃO BERNARDO DO CAMPO",
        state="SP",
    ))


@pytest_asyncio.fixture
async def port(storage) -> Port:
    return await storage.save_port(Port(
        name="BTP",
        legal_name="BRASIL TERMINAL PORTUARIO S.A.",
        city="SANTOS",
        state="SP",
    ))


# ── Redis Fixtures ───────────────────────────────────────────────

@pytest_asyncio.fixture
async def redis_store():
    """Redis-backed local store; skipped when no redis server answers."""
    store = RedisLocalStore(settings.redis_url)
    if not await store.ping():
        await store.close()
        pytest.skip("redis not reachable")

    yield store

    # Cleanup: flush test database
    await store._redis().flushdb()
    await store.close()


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "cloud: Tests against the cloud mirror (SQLite)")
    config.addinivalue_line("markers", "redis: Tests requiring a redis server")
