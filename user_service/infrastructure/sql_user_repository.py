"""SQL User Repository — relational adapter over SQLAlchemy async sessions.

Invariants:
    - Identity assigned by the engine (autoincrement primary key)
    - get_by_id is a primary-key lookup; no row → UserNotFoundError
    - update re-reads the row first (absent → UserNotFoundError), then writes only
      the non-empty fields
    - delete with zero affected rows → UserNotFoundError
    - Driver/engine failures surface as StorageError via DatabaseSessionManager
"""

import logging

from sqlalchemy import delete, select

from user_service.core.errors import UserNotFoundError
from user_service.core.user_entity import User, UserChanges
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.models.user import UserRecord

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """UserRepository backed by the `users` table."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def create(self, name: str, email: str) -> User:
        async with self._db.session() as db:
            record = UserRecord(name=name, email=email)
            db.add(record)
            await db.commit()
            await db.refresh(record)
            logger.debug("User created", extra={"user_id": record.id, "backend": "postgres"})
            return record.to_entity()

    async def get_by_id(self, user_id: int) -> User:
        async with self._db.session() as db:
            record = await db.get(UserRecord, user_id)
            if record is None:
                raise UserNotFoundError(user_id)
            return record.to_entity()

    async def get_all(self) -> list[User]:
        async with self._db.session() as db:
            result = await db.execute(select(UserRecord).order_by(UserRecord.id))
            return [record.to_entity() for record in result.scalars().all()]

    async def update(self, user_id: int, changes: UserChanges) -> User:
        async with self._db.session() as db:
            record = await db.get(UserRecord, user_id)
            if record is None:
                raise UserNotFoundError(user_id)
            for column, value in changes.as_updates().items():
                setattr(record, column, value)
            await db.commit()
            return record.to_entity()

    async def delete(self, user_id: int) -> None:
        async with self._db.session() as db:
            result = await db.execute(
                delete(UserRecord).where(UserRecord.id == user_id),
            )
            await db.commit()
            if result.rowcount == 0:
                raise UserNotFoundError(user_id)
