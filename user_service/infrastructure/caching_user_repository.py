"""Caching User Repository — opt-in cache-aside decorator over any UserRepository.

Invariants:
    - Reads check the cache first; a miss delegates to the store, then populates
    - Writes delegate first, then evict user:<id> and users:all (create too:
      a user:<id> left by another process must not shadow the new row)
    - CacheError on read/populate/evict is logged and the store result is used
    - Store errors always propagate unchanged
    - Out-of-band writes to the store can be served stale until the TTL expires

Design Decisions:
    - Decorator, not a service concern: UserService stays unaware of caching
    - Evict instead of write-through: a failed eviction degrades to TTL staleness
"""

import logging
from datetime import timedelta

from user_service.core.errors import CacheError
from user_service.core.repository_protocols import UserCache, UserRepository
from user_service.core.user_entity import User, UserChanges

logger = logging.getLogger(__name__)


class CachingUserRepository:
    """UserRepository that consults a UserCache before the wrapped store."""

    def __init__(
        self, repository: UserRepository, cache: UserCache, ttl: int | timedelta,
    ):
        self._repository = repository
        self._cache = cache
        self._ttl = ttl

    async def create(self, name: str, email: str) -> User:
        user = await self._repository.create(name, email)
        await self._evict_user(user.id)
        await self._evict_list()
        return user

    async def get_by_id(self, user_id: int) -> User:
        try:
            cached = await self._cache.get_user(user_id)
        except CacheError as e:
            logger.warning(
                f"Cache read failed, using store: {e.message}",
                extra={"user_id": user_id, "error_code": e.code},
            )
            cached = None
        if cached is not None:
            return cached

        user = await self._repository.get_by_id(user_id)
        try:
            await self._cache.set_user(user, self._ttl)
        except CacheError as e:
            logger.warning(
                f"Cache populate failed: {e.message}",
                extra={"user_id": user_id, "error_code": e.code},
            )
        return user

    async def get_all(self) -> list[User]:
        try:
            cached = await self._cache.get_users()
        except CacheError as e:
            logger.warning(
                f"Cache read failed, using store: {e.message}",
                extra={"error_code": e.code},
            )
            cached = None
        if cached is not None:
            return cached

        users = await self._repository.get_all()
        try:
            await self._cache.set_users(users, self._ttl)
        except CacheError as e:
            logger.warning(
                f"Cache populate failed: {e.message}", extra={"error_code": e.code},
            )
        return users

    async def update(self, user_id: int, changes: UserChanges) -> User:
        user = await self._repository.update(user_id, changes)
        await self._evict_user(user_id)
        await self._evict_list()
        return user

    async def delete(self, user_id: int) -> None:
        await self._repository.delete(user_id)
        await self._evict_user(user_id)
        await self._evict_list()

    async def _evict_user(self, user_id: int) -> None:
        try:
            await self._cache.delete_user(user_id)
        except CacheError as e:
            logger.warning(
                f"Cache evict failed: {e.message}",
                extra={"user_id": user_id, "error_code": e.code},
            )

    async def _evict_list(self) -> None:
        try:
            await self._cache.delete_users()
        except CacheError as e:
            logger.warning(
                f"Cache evict failed: {e.message}", extra={"error_code": e.code},
            )
