"""Single-actor runtime: one addressable, serialized stateful unit per name.

An ActorNamespace hands out at most one live DomainActor per actor id. Every
call into an actor runs under that actor's lock, so operations on one actor
never interleave, even across awaits on its storage. Each actor owns a
private key space (ActorStorageProtocol); actors cannot see each other's keys.

Storage choices:
    InMemoryActorStorage  process-local dict, lost on restart
    RedisActorStorage     one Redis hash per actor id, JSON-encoded values
"""

import asyncio
import hashlib
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as aioredis

from src.do_ledger.domain.repository import ActorStorageProtocol

_T = TypeVar("_T")

ACTOR_HASH_PREFIX = "actor:"


class InMemoryActorStorage:
    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any:
        # Hand out copies: callers mutate what they read before put()
        value = self._data.get(key)
        return json.loads(json.dumps(value)) if value is not None else None

    async def put(self, key: str, value: Any) -> None:
        self._data[key] = json.loads(json.dumps(value))

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisActorStorage:
    def __init__(self, client: aioredis.Redis, actor_id: str) -> None:
        self._redis = client
        self._hash = f"{ACTOR_HASH_PREFIX}{actor_id}"

    async def get(self, key: str) -> Any:
        raw = await self._redis.hget(self._hash, key)
        return None if raw is None else json.loads(raw)

    async def put(self, key: str, value: Any) -> None:
        await self._redis.hset(self._hash, key, json.dumps(value))

    async def delete(self, key: str) -> None:
        await self._redis.hdel(self._hash, key)


StorageFactory = Callable[[str], ActorStorageProtocol]


class DomainActor:
    def __init__(self, actor_id: str, storage: ActorStorageProtocol) -> None:
        self.actor_id = actor_id
        self._storage = storage
        self._lock = asyncio.Lock()

    async def call(self, fn: Callable[[ActorStorageProtocol], Awaitable[_T]]) -> _T:
        """Run `fn` against this actor's storage, one call at a time."""
        async with self._lock:
            return await fn(self._storage)


class ActorNamespace:
    def __init__(self, storage_factory: StorageFactory) -> None:
        self._storage_factory = storage_factory
        self._actors: dict[str, DomainActor] = {}

    @staticmethod
    def id_from_name(name: str) -> str:
        """Deterministic actor id for a name (same name -> same actor)."""
        return hashlib.sha256(name.encode("utf-8")).hexdigest()

    def get(self, actor_id: str) -> DomainActor:
        actor = self._actors.get(actor_id)
        if actor is None:
            actor = DomainActor(actor_id, self._storage_factory(actor_id))
            self._actors[actor_id] = actor
        return actor


def in_memory_namespace() -> ActorNamespace:
    return ActorNamespace(lambda _actor_id: InMemoryActorStorage())


def redis_namespace(client: aioredis.Redis) -> ActorNamespace:
    return ActorNamespace(lambda actor_id: RedisActorStorage(client, actor_id))
