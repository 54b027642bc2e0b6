"""Cloud table gateway shared by every collection.

A repository translates between a pydantic record (snake_case attribute
names, camelCase aliases) and its cloud table, and wraps the three calls the
storage facade needs: select all, upsert by id, delete.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from als.database import CloudBase
from als.middleware.exceptions import CloudPersistenceError
from als.schemas.base import Record

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class CloudRepository(Generic[R]):
    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        model: type[CloudBase],
        schema: type[R],
    ):
        self._sessionmaker = sessionmaker
        self.model = model
        self.schema = schema
        self.columns = [c.key for c in model.__table__.columns]

    @property
    def table(self) -> str:
        return self.model.__tablename__

    # ── Mapping ─────────────────────────────────────────────────

    def to_row(self, record: R) -> dict[str, Any]:
        data = record.model_dump(mode="json")
        return {column: data.get(column) for column in self.columns}

    def from_row(self, row: CloudBase) -> R:
        # NULL columns fall back to the record defaults
        data = {c: getattr(row, c) for c in self.columns if getattr(row, c) is not None}
        return self.schema.model_validate(data)

    # ── Calls ───────────────────────────────────────────────────

    @asynccontextmanager
    async def _session(self, action: str):
        try:
            async with self._sessionmaker() as session:
                yield session
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Cloud {action} on {self.table} failed: {e}")
            raise CloudPersistenceError(f"{self.table}: {action} failed") from e

    async def fetch_all(self) -> list[R]:
        async with self._session("select") as session:
            result = await session.execute(select(self.model).order_by(self.model.id))
            rows = result.scalars().all()
        return [self.from_row(row) for row in rows]

    async def upsert(self, record: R) -> None:
        async with self._session("upsert") as session:
            await session.merge(self.model(**self.to_row(record)))

    async def delete(self, record_id: str) -> None:
        async with self._session("delete") as session:
            await session.execute(delete(self.model).where(self.model.id == record_id))

    async def delete_where(self, column: str, value: str) -> None:
        async with self._session("delete") as session:
            await session.execute(
                delete(self.model).where(getattr(self.model, column) == value)
            )
