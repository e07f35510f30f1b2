"""Flat key-value stores: concrete KeyValueStoreProtocol implementations.

RedisKeyValueStore is the production store. InMemoryKeyValueStore keeps the
same contract in a dict for local development and tests.
"""

import redis.asyncio as aioredis
from redis.exceptions import ResponseError

from src.do_common.errors import CorruptLedgerDataError


class RedisKeyValueStore:
    """String values in Redis. Counters use INCR so increments are atomic."""

    def __init__(self, client: aioredis.Redis, scan_batch: int = 500) -> None:
        self._redis = client
        self._scan_batch = scan_batch

    async def get(self, key: str) -> str | None:
        value = await self._redis.get(key)
        return None if value is None else str(value)

    async def put(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def incr(self, key: str) -> int:
        try:
            return int(await self._redis.incr(key))
        except ResponseError as e:
            # "value is not an integer or out of range"
            raise CorruptLedgerDataError(key, str(e)) from e

    async def list_keys(self, prefix: str) -> list[str]:
        # SCAN, not KEYS
        keys = [
            str(k)
            async for k in self._redis.scan_iter(match=f"{prefix}*", count=self._scan_batch)
        ]
        return sorted(set(keys))


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def incr(self, key: str) -> int:
        # Mirrors Redis INCR: a non-integer value is an error, not a reset
        raw = self._data.get(key, "0")
        try:
            value = int(raw, 10) + 1
        except ValueError as e:
            raise CorruptLedgerDataError(key, f"counter {raw!r} is not an integer") from e
        self._data[key] = str(value)
        return value

    async def list_keys(self, prefix: str) -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))
