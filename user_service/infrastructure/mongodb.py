"""Mongo Client Manager — owns the async PyMongo client for one database.

Invariants:
    - connect() pings the server; failure → StorageError, client closed
    - database is only valid after a successful connect()
"""

import logging

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from user_service.core.errors import StorageError

logger = logging.getLogger(__name__)


class MongoClientManager:
    """Async Mongo client with startup ping and health check."""

    def __init__(self, uri: str, db_name: str, connect_timeout: float = 5.0):
        timeout_ms = int(connect_timeout * 1000)
        self.client = AsyncMongoClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        self.database = self.client[db_name]

    async def connect(self) -> None:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            await self.client.close()
            raise StorageError(f"MongoDB unreachable ({type(e).__name__})", "connect")
        logger.info("MongoDB connected", extra={"backend": "mongodb"})

    async def health_check(self) -> bool:
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
