"""Tests for the local key-value stores."""

import pytest

from als.config import Settings
from als.store.local import (
    ALL_KEYS,
    FileLocalStore,
    Keys,
    RedisLocalStore,
    build_local_store,
)


@pytest.mark.unit
@pytest.mark.asyncio
class TestFileLocalStore:
    async def test_missing_keys_read_as_empty(self, local_store):
        assert await local_store.get_raw(Keys.DRIVERS) is None
        assert await local_store.get_list(Keys.DRIVERS) == []
        assert await local_store.get_map(Keys.PREFERENCES) == {}
        assert await local_store.is_empty() is True

    async def test_list_round_trip_keeps_unicode(self, local_store):
        records = [{"id": "cust-1", "name": "SÃO PAULO AÇÚCAR"}]
        await local_store.set_list(Keys.CUSTOMERS, records)

        assert await local_store.get_list(Keys.CUSTOMERS) == records
        assert "SÃO PAULO" in await local_store.get_raw(Keys.CUSTOMERS)
        assert await local_store.is_empty() is False

    async def test_one_file_per_key(self, local_store):
        await local_store.set_map(Keys.PREFERENCES, {"u-1": {"visibleColumns": {}}})
        assert (local_store.path / "als_ui_preferences.json").exists()
        assert not list(local_store.path.glob("*.tmp"))

    async def test_ping_creates_directory(self, tmp_path):
        store = FileLocalStore(tmp_path / "nested" / "store")
        assert await store.ping() is True
        assert store.path.is_dir()


@pytest.mark.unit
class TestBuildLocalStore:
    def test_keys(self):
        assert len(ALL_KEYS) == len(set(ALL_KEYS)) == 9
        assert all(key.startswith("als_") for key in ALL_KEYS)

    def test_file_backend(self, tmp_path):
        store = build_local_store(Settings(local_store_path=str(tmp_path)))
        assert isinstance(store, FileLocalStore)

    def test_redis_backend(self):
        store = build_local_store(Settings(local_store_backend="redis"))
        assert isinstance(store, RedisLocalStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_local_store(Settings(local_store_backend="memcached"))


@pytest.mark.redis
@pytest.mark.asyncio
class TestRedisLocalStore:
    async def test_round_trip(self, redis_store):
        await redis_store.set_list(Keys.TRIPS, [{"id": "trip-1", "os": "SP123456A"}])
        assert await redis_store.get_list(Keys.TRIPS) == [{"id": "trip-1", "os": "SP123456A"}]
        assert await redis_store.get_raw(Keys.PORTS) is None
