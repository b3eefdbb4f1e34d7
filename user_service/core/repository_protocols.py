"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - UserRepository raises UserNotFoundError for missing ids, StorageError for
      every other store failure; get_all() returns [] (never None) when empty
    - UserCache returns None on a miss and raises CacheError on failure

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: every implementation does IO (or takes an async lock)
"""

from datetime import timedelta
from typing import Protocol

from user_service.core.user_entity import User, UserChanges


class UserRepository(Protocol):
    """Contract for user persistence — implemented by memory, SQL and Mongo adapters."""
    async def create(self, name: str, email: str) -> User: ...
    async def get_by_id(self, user_id: int) -> User: ...
    async def get_all(self) -> list[User]: ...
    async def update(self, user_id: int, changes: UserChanges) -> User: ...
    async def delete(self, user_id: int) -> None: ...


class UserCache(Protocol):
    """Contract for the user key-value cache — implemented by RedisUserCache."""
    async def set_user(self, user: User, ttl: int | timedelta) -> None: ...
    async def get_user(self, user_id: int) -> User | None: ...
    async def delete_user(self, user_id: int) -> None: ...
    async def set_users(self, users: list[User], ttl: int | timedelta) -> None: ...
    async def get_users(self) -> list[User] | None: ...
    async def delete_users(self) -> None: ...
