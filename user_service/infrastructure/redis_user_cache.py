"""Redis User Cache — key-value cache for single users and the full user list.

Invariants:
    - Keys: user:<id> (one JSON object), users:all (JSON array)
    - get_* returns None on a miss, never raises for a miss
    - Missing client or any RedisError → CacheUnavailableError
    - Unencodable/undecodable payload → CacheDataError
    - A falsy TTL (0, timedelta(0), None) stores without expiry
    - A negative TTL → CacheDataError, never sent to Redis

Design Decisions:
    - JSON over pickle: payloads readable from redis-cli and other services
    - Errors typed apart from misses so callers cannot conflate the two
"""

import json
import logging
from datetime import timedelta
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from user_service.core.domain_types import ALL_USERS_KEY, user_cache_key
from user_service.core.errors import CacheDataError, CacheUnavailableError
from user_service.core.user_entity import User

logger = logging.getLogger(__name__)


class RedisUserCache:
    """UserCache backed by redis.asyncio."""

    def __init__(self, client: Redis | None):
        self._client = client

    def _require_client(self) -> Redis:
        if self._client is None:
            raise CacheUnavailableError("redis client not available")
        return self._client

    async def _get(self, key: str) -> Any:
        client = self._require_client()
        try:
            raw = await client.get(key)
        except RedisError as e:
            raise CacheUnavailableError(f"GET {key} failed ({type(e).__name__})")
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (ValueError, TypeError) as e:
            raise CacheDataError(str(e), key)

    async def _set(self, key: str, value: Any, ttl: int | timedelta | None) -> None:
        client = self._require_client()
        seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else ttl
        if seconds is not None and seconds < 0:
            raise CacheDataError(f"negative TTL {ttl!r}", key)
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheDataError(str(e), key)
        try:
            await client.set(key, payload, ex=ttl or None)
        except RedisError as e:
            raise CacheUnavailableError(f"SET {key} failed ({type(e).__name__})")

    async def _delete(self, key: str) -> None:
        client = self._require_client()
        try:
            await client.delete(key)
        except RedisError as e:
            raise CacheUnavailableError(f"DEL {key} failed ({type(e).__name__})")

    async def set_user(self, user: User, ttl: int | timedelta | None) -> None:
        await self._set(user_cache_key(user.id), user.to_dict(), ttl)

    async def get_user(self, user_id: int) -> User | None:
        key = user_cache_key(user_id)
        data = await self._get(key)
        if data is None:
            return None
        try:
            return User.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise CacheDataError(str(e), key)

    async def delete_user(self, user_id: int) -> None:
        await self._delete(user_cache_key(user_id))

    async def set_users(self, users: list[User], ttl: int | timedelta | None) -> None:
        await self._set(ALL_USERS_KEY, [u.to_dict() for u in users], ttl)

    async def get_users(self) -> list[User] | None:
        data = await self._get(ALL_USERS_KEY)
        if data is None:
            return None
        try:
            return [User.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise CacheDataError(str(e), ALL_USERS_KEY)

    async def delete_users(self) -> None:
        await self._delete(ALL_USERS_KEY)
