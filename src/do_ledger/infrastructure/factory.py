"""Build the configured ledger backing from Settings."""

import redis.asyncio as aioredis

from config.settings import Settings
from src.do_ledger.domain.repository import OfferLedgerProtocol
from src.do_ledger.infrastructure.actor import in_memory_namespace, redis_namespace
from src.do_ledger.infrastructure.actor_ledger import ActorOfferLedger
from src.do_ledger.infrastructure.kv_ledger import KVOfferLedger
from src.do_ledger.infrastructure.kv_store import InMemoryKeyValueStore, RedisKeyValueStore


def build_ledger(settings: Settings, redis: aioredis.Redis | None) -> OfferLedgerProtocol:
    """LEDGER_BACKEND picks the variant, STORAGE_BACKEND where it keeps state.

    `redis` must be given when STORAGE_BACKEND is "redis".
    """
    if settings.STORAGE_BACKEND == "memory":
        if settings.LEDGER_BACKEND == "actor":
            return ActorOfferLedger(in_memory_namespace())
        return KVOfferLedger(InMemoryKeyValueStore())

    if redis is None:
        raise ValueError("STORAGE_BACKEND=redis requires a Redis client")
    if settings.LEDGER_BACKEND == "actor":
        return ActorOfferLedger(redis_namespace(redis))
    return KVOfferLedger(RedisKeyValueStore(redis))
