"""Redis Client Factory — builds and probes the async Redis client.

Invariants:
    - connect_redis() returns a client only after a successful PING
    - Unreachable server → CacheUnavailableError, client closed
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from user_service.core.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


async def connect_redis(url: str, connect_timeout: float = 5.0) -> Redis:
    client = Redis.from_url(
        url,
        socket_connect_timeout=connect_timeout,
        socket_timeout=connect_timeout,
    )
    try:
        await client.ping()
    except RedisError as e:
        await client.aclose()
        raise CacheUnavailableError(f"Redis unreachable ({type(e).__name__})")
    logger.info("Redis connected")
    return client
