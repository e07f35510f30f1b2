"""Unit tests for the flat key-value stores."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ResponseError

from src.do_common.errors import CorruptLedgerDataError
from src.do_ledger.infrastructure.kv_store import InMemoryKeyValueStore, RedisKeyValueStore


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_put_delete(self) -> None:
        store = InMemoryKeyValueStore()
        assert await store.get("k") is None
        await store.put("k", "v")
        assert await store.get("k") == "v"
        await store.delete("k")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self) -> None:
        await InMemoryKeyValueStore().delete("missing")

    @pytest.mark.asyncio
    async def test_incr_starts_at_one(self) -> None:
        store = InMemoryKeyValueStore()
        assert await store.incr("visits:a") == 1
        assert await store.incr("visits:a") == 2
        assert await store.get("visits:a") == "2"

    @pytest.mark.asyncio
    async def test_incr_on_non_integer_raises(self) -> None:
        store = InMemoryKeyValueStore()
        await store.put("visits:a", "lots")
        with pytest.raises(CorruptLedgerDataError):
            await store.incr("visits:a")

    @pytest.mark.asyncio
    async def test_list_keys_by_prefix(self) -> None:
        store = InMemoryKeyValueStore()
        for key in ("offers:b.com", "offers:a.com", "visits:a.com"):
            await store.put(key, "x")
        assert await store.list_keys("offers:") == ["offers:a.com", "offers:b.com"]


def _scan_iter(keys: list[str]):
    async def _gen(*args, **kwargs):
        for k in keys:
            yield k

    return _gen


class TestRedisKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_passes_through(self) -> None:
        client = MagicMock()
        client.get = AsyncMock(return_value="5")
        assert await RedisKeyValueStore(client).get("visits:a") == "5"
        client.get.assert_awaited_once_with("visits:a")

    @pytest.mark.asyncio
    async def test_put_and_delete(self) -> None:
        client = MagicMock()
        client.set = AsyncMock()
        client.delete = AsyncMock()
        store = RedisKeyValueStore(client)
        await store.put("offers:a", "[]")
        await store.delete("offers:a")
        client.set.assert_awaited_once_with("offers:a", "[]")
        client.delete.assert_awaited_once_with("offers:a")

    @pytest.mark.asyncio
    async def test_incr_uses_redis_incr(self) -> None:
        client = MagicMock()
        client.incr = AsyncMock(return_value=3)
        assert await RedisKeyValueStore(client).incr("visits:a") == 3
        client.incr.assert_awaited_once_with("visits:a")

    @pytest.mark.asyncio
    async def test_incr_response_error_is_corrupt_data(self) -> None:
        client = MagicMock()
        client.incr = AsyncMock(side_effect=ResponseError("value is not an integer or out of range"))
        with pytest.raises(CorruptLedgerDataError):
            await RedisKeyValueStore(client).incr("visits:a")

    @pytest.mark.asyncio
    async def test_list_keys_scans_with_prefix_match(self) -> None:
        client = MagicMock()
        client.scan_iter = MagicMock(side_effect=_scan_iter(["offers:b", "offers:a", "offers:a"]))
        keys = await RedisKeyValueStore(client, scan_batch=10).list_keys("offers:")
        assert keys == ["offers:a", "offers:b"]
        client.scan_iter.assert_called_once_with(match="offers:*", count=10)
