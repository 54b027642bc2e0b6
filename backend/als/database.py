"""Cloud database engine, session factory, and declarative base.

The cloud mirror is optional: when ``cloud_database_url`` is empty no engine
is ever created and every accessor below returns ``None``, so the storage
facade runs against the local store only.

  - CloudBase           → tables mirroring each local collection
  - get_sessionmaker()  → async session factory, or None when not configured
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from als.config import settings

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


class CloudBase(DeclarativeBase):
    """Models mirrored to the cloud database."""
    pass


def is_cloud_configured() -> bool:
    return bool(settings.cloud_database_url)


def get_engine() -> AsyncEngine | None:
    """Create the cloud engine on first use (None when cloud is disabled)."""
    global _engine
    if _engine is None and is_cloud_configured():
        _engine = create_async_engine(
            settings.cloud_database_url,
            echo=settings.debug,
            pool_pre_ping=True,
        )
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession] | None:
    global _sessionmaker
    engine = get_engine()
    if engine is None:
        return None
    if _sessionmaker is None:
        _sessionmaker = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
    return _sessionmaker


async def create_cloud_tables(engine: AsyncEngine | None = None) -> None:
    """Create any missing cloud tables (dev/test convenience; prod uses Alembic)."""
    import als.models  # noqa: F401  registers every table on CloudBase.metadata

    engine = engine or get_engine()
    if engine is None:
        return
    async with engine.begin() as conn:
        await conn.run_sync(CloudBase.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessionmaker = None
