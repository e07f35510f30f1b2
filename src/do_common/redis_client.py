"""Redis client factory: backs the flat key-value ledger and actor storage.

One pool per application; create_app() builds it from Settings and the
lifespan hook closes it.
"""

import redis.asyncio as aioredis


def create_redis(url: str) -> aioredis.Redis:
    """Create a Redis connection pool. Connections are opened lazily."""
    return aioredis.from_url(url, decode_responses=True)


async def ping_redis(client: aioredis.Redis) -> None:
    """Fail fast at startup if Redis is unreachable."""
    await client.ping()


async def close_redis(client: aioredis.Redis) -> None:
    """Close the Redis connection pool."""
    await client.aclose()
