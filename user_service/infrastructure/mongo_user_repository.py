"""Mongo User Repository — document-store adapter over async PyMongo.

Invariants:
    - The public id is an ordinary integer field `id`, unique-indexed
    - Ids come from an atomic $inc on counters/{_id: "users"}; first id is 1
    - The native `_id` is never returned nor queried (projection drops it)
    - Every store call runs under a fixed deadline (OPERATION_TIMEOUT_SECONDS)
    - Deadline expiry and PyMongoError surface as StorageError
    - A failed insert still consumes its counter value; ids may have gaps

Design Decisions:
    - Counter collection over ObjectId narrowing: ObjectId fragments collide, a
      sequence does not
    - Email uniqueness enforced with a unique index (ensure_indexes at startup)
"""

import asyncio
import logging
from typing import Any, Awaitable

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from user_service.core.errors import StorageError, UserNotFoundError
from user_service.core.user_entity import User, UserChanges

logger = logging.getLogger(__name__)

OPERATION_TIMEOUT_SECONDS = 5.0
USERS_COLLECTION = "users"
COUNTERS_COLLECTION = "counters"
_PROJECTION = {"_id": 0, "id": 1, "name": 1, "email": 1}


class MongoUserRepository:
    """UserRepository backed by a Mongo collection."""

    def __init__(self, database: Any):
        self._users = database[USERS_COLLECTION]
        self._counters = database[COUNTERS_COLLECTION]

    async def _call(self, operation: str, awaitable: Awaitable) -> Any:
        try:
            return await asyncio.wait_for(awaitable, OPERATION_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.error(f"Mongo {operation} timed out", extra={"operation": operation})
            raise StorageError("Deadline exceeded", operation)
        except PyMongoError as e:
            logger.error(f"Mongo {operation} error: {e}", extra={"operation": operation})
            raise StorageError(type(e).__name__, operation)

    async def ensure_indexes(self) -> None:
        await self._call(
            "create_index",
            self._users.create_index([("id", ASCENDING)], unique=True),
        )
        await self._call(
            "create_index",
            self._users.create_index([("email", ASCENDING)], unique=True),
        )

    async def _next_id(self) -> int:
        counter = await self._call(
            "next_id",
            self._counters.find_one_and_update(
                {"_id": USERS_COLLECTION},
                {"$inc": {"seq": 1}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            ),
        )
        return int(counter["seq"])

    async def create(self, name: str, email: str) -> User:
        user = User(id=await self._next_id(), name=name, email=email)
        # insert_one adds _id to the dict it is given
        await self._call("insert", self._users.insert_one(user.to_dict()))
        logger.debug("User created", extra={"user_id": user.id, "backend": "mongodb"})
        return user

    async def get_by_id(self, user_id: int) -> User:
        doc = await self._call(
            "find", self._users.find_one({"id": user_id}, _PROJECTION),
        )
        if doc is None:
            raise UserNotFoundError(user_id)
        return User.from_dict(doc)

    async def get_all(self) -> list[User]:
        cursor = self._users.find({}, _PROJECTION).sort("id", ASCENDING)
        docs = await self._call("find", cursor.to_list(None))
        return [User.from_dict(doc) for doc in docs]

    async def update(self, user_id: int, changes: UserChanges) -> User:
        updates = changes.as_updates()
        if not updates:
            return await self.get_by_id(user_id)
        doc = await self._call(
            "update",
            self._users.find_one_and_update(
                {"id": user_id},
                {"$set": updates},
                projection=_PROJECTION,
                return_document=ReturnDocument.AFTER,
            ),
        )
        if doc is None:
            raise UserNotFoundError(user_id)
        return User.from_dict(doc)

    async def delete(self, user_id: int) -> None:
        result = await self._call("delete", self._users.delete_one({"id": user_id}))
        if result.deleted_count == 0:
            raise UserNotFoundError(user_id)
