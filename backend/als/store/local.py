"""Local key-value store holding the offline copy of every collection.

Each key maps to one JSON document: a list of camelCase records for the
collections, or a mapping for UI preferences. Two backends:

  - FileLocalStore   one ``<key>.json`` file per key under a data directory
  - RedisLocalStore  one redis string per key (shared by several workers)

Values are stored exactly as serialized, so a backup is a plain copy of the
raw strings.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class Keys:
    DRIVERS = "als_drivers"
    CUSTOMERS = "als_customers"
    PORTS = "als_ports"
    PRE_STACKING = "als_pre_stacking"
    STAFF = "als_staff"
    USERS = "als_users"
    TRIPS = "als_trips"
    CATEGORIES = "als_categories"
    PREFERENCES = "als_ui_preferences"


ALL_KEYS: list[str] = [
    Keys.DRIVERS,
    Keys.CUSTOMERS,
    Keys.PORTS,
    Keys.PRE_STACKING,
    Keys.STAFF,
    Keys.USERS,
    Keys.TRIPS,
    Keys.CATEGORIES,
    Keys.PREFERENCES,
]


class LocalStore:
    """Async key → JSON store. Subclasses implement the raw string access."""

    async def get_raw(self, key: str) -> str | None:
        raise NotImplementedError

    async def set_raw(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    async def get_list(self, key: str) -> list[dict[str, Any]]:
        raw = await self.get_raw(key)
        return json.loads(raw) if raw else []

    async def set_list(self, key: str, records: list[dict[str, Any]]) -> None:
        await self.set_raw(key, json.dumps(records, ensure_ascii=False))

    async def get_map(self, key: str) -> dict[str, Any]:
        raw = await self.get_raw(key)
        return json.loads(raw) if raw else {}

    async def set_map(self, key: str, mapping: dict[str, Any]) -> None:
        await self.set_raw(key, json.dumps(mapping, ensure_ascii=False))

    async def is_empty(self) -> bool:
        for key in ALL_KEYS:
            if await self.get_raw(key) is not None:
                return False
        return True


class FileLocalStore(LocalStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _file(self, key: str) -> Path:
        return self.path / f"{key}.json"

    async def get_raw(self, key: str) -> str | None:
        file = self._file(key)
        if not file.exists():
            return None
        return file.read_text(encoding="utf-8")

    async def set_raw(self, key: str, value: str) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        file = self._file(key)
        tmp = file.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        # Readers never see a half-written file
        os.replace(tmp, file)

    async def ping(self) -> bool:
        self.path.mkdir(parents=True, exist_ok=True)
        return os.access(self.path, os.W_OK)


class RedisLocalStore(LocalStore):
    def __init__(self, url: str):
        self.url = url
        self._client: redis.Redis | None = None

    def _redis(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def get_raw(self, key: str) -> str | None:
        return await self._redis().get(key)

    async def set_raw(self, key: str, value: str) -> None:
        await self._redis().set(key, value)

    async def ping(self) -> bool:
        try:
            return bool(await self._redis().ping())
        except redis.RedisError as e:
            logger.warning(f"Local redis store unreachable: {e}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def build_local_store(settings) -> LocalStore:
    """Pick the local store backend from settings."""
    if settings.local_store_backend == "redis":
        logger.info("Using redis local store at %s", settings.redis_url)
        return RedisLocalStore(settings.redis_url)
    if settings.local_store_backend != "file":
        raise ValueError(f"Unknown local store backend: {settings.local_store_backend!r}")
    logger.info("Using file local store at %s", settings.local_store_path)
    return FileLocalStore(settings.local_store_path)
