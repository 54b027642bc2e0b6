"""FastAPI dependencies.

One StorageFacade per process, built from settings on first use. Tests swap
it through ``app.dependency_overrides[get_storage]``.
"""

from als.config import settings
from als.database import get_sessionmaker
from als.services.storage import StorageFacade
from als.store.local import build_local_store

_storage: StorageFacade | None = None


def get_storage() -> StorageFacade:
    global _storage
    if _storage is None:
        _storage = StorageFacade(build_local_store(settings), get_sessionmaker())
    return _storage


async def close_storage() -> None:
    global _storage
    if _storage is not None:
        await _storage.local.close()
    _storage = None
