"""In-Memory User Repository — process-local store guarded by a reader/writer lock.

Invariants:
    - Reads (get_by_id, get_all) share the reader lock and may run together
    - Writes (create, update, delete) hold the writer lock exclusively
    - Ids come from a counter starting at 1, incremented only under the writer lock
    - State lives for the process lifetime only
    - Email uniqueness is NOT enforced here

Design Decisions:
    - aiorwlock.RWLock: asyncio-native reader/writer semantics
    - Stored User values are frozen, so returning them without copying is safe
"""

import logging

import aiorwlock

from user_service.core.errors import UserNotFoundError
from user_service.core.user_entity import User, UserChanges

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """UserRepository backed by a dict."""

    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._lock = aiorwlock.RWLock()

    async def create(self, name: str, email: str) -> User:
        async with self._lock.writer_lock:
            user = User(id=self._next_id, name=name, email=email)
            self._next_id += 1
            self._users[user.id] = user
        logger.debug("User created", extra={"user_id": user.id, "backend": "memory"})
        return user

    async def get_by_id(self, user_id: int) -> User:
        async with self._lock.reader_lock:
            user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_all(self) -> list[User]:
        async with self._lock.reader_lock:
            return [self._users[k] for k in sorted(self._users)]

    async def update(self, user_id: int, changes: UserChanges) -> User:
        async with self._lock.writer_lock:
            existing = self._users.get(user_id)
            if existing is None:
                raise UserNotFoundError(user_id)
            updated = existing.merged(changes)
            self._users[user_id] = updated
        return updated

    async def delete(self, user_id: int) -> None:
        async with self._lock.writer_lock:
            if self._users.pop(user_id, None) is None:
                raise UserNotFoundError(user_id)

    async def health_check(self) -> bool:
        return True
