"""Storage Factory — builds the process's UserRepository once at startup.

Invariants:
    - Only stores that the requested backend could use are probed
    - A store that fails its probe is closed and reported unavailable
    - The concrete backend comes from core.select_backend.resolve_backend
    - Cache-aside wrapping happens only when cache_enabled AND Redis answers
    - UserStorage owns every client it opened; close() releases all of them

Design Decisions:
    - Backend → constructor table instead of an if/elif chain on strings
    - Clients passed to adapters explicitly; nothing stored in module globals
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError

from user_service.config import Settings
from user_service.core.domain_types import StorageBackend
from user_service.core.errors import CacheUnavailableError, StorageError
from user_service.core.repository_protocols import UserRepository
from user_service.core.select_backend import resolve_backend, stores_to_probe
from user_service.infrastructure.caching_user_repository import CachingUserRepository
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.infrastructure.memory_user_repository import InMemoryUserRepository
from user_service.infrastructure.mongo_user_repository import MongoUserRepository
from user_service.infrastructure.mongodb import MongoClientManager
from user_service.infrastructure.redis_client import connect_redis
from user_service.infrastructure.redis_user_cache import RedisUserCache
from user_service.infrastructure.sql_user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


@dataclass
class StoreHandles:
    """Connected clients, keyed by what they serve. None means unavailable."""
    postgres: DatabaseSessionManager | None = None
    mongodb: MongoClientManager | None = None


@dataclass
class UserStorage:
    """The repository a process serves from, plus the clients behind it."""
    repository: UserRepository
    backend: StorageBackend
    health_check: Callable[[], Awaitable[bool]]
    cached: bool = False
    closers: list[Callable[[], Awaitable[None]]] = field(default_factory=list)

    async def close(self) -> None:
        for closer in reversed(self.closers):
            try:
                await closer()
            except Exception as e:
                logger.error(f"Error closing storage client: {e}")
        self.closers.clear()


async def _memory_health() -> bool:
    return True


def _build_memory(handles: StoreHandles) -> tuple[UserRepository, Callable]:
    return InMemoryUserRepository(), _memory_health


def _build_postgres(handles: StoreHandles) -> tuple[UserRepository, Callable]:
    return SqlUserRepository(handles.postgres), handles.postgres.health_check


def _build_mongodb(handles: StoreHandles) -> tuple[UserRepository, Callable]:
    return MongoUserRepository(handles.mongodb.database), handles.mongodb.health_check


REPOSITORY_CONSTRUCTORS: dict[
    StorageBackend, Callable[[StoreHandles], tuple[UserRepository, Callable]]
] = {
    StorageBackend.MEMORY: _build_memory,
    StorageBackend.POSTGRES: _build_postgres,
    StorageBackend.MONGODB: _build_mongodb,
}


async def open_postgres(settings: Settings) -> DatabaseSessionManager | None:
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        connect_timeout=settings.connect_timeout_seconds,
    )
    if not await manager.health_check():
        logger.warning("PostgreSQL connection failed", extra={"backend": "postgres"})
        await manager.close()
        return None
    if settings.database_create_tables:
        try:
            await manager.create_tables()
        except SQLAlchemyError as e:
            logger.warning(f"PostgreSQL table creation failed: {e}")
    logger.info("PostgreSQL connected", extra={"backend": "postgres"})
    return manager


async def open_mongodb(settings: Settings) -> MongoClientManager | None:
    manager = MongoClientManager(
        settings.mongodb_uri, settings.mongodb_db,
        connect_timeout=settings.connect_timeout_seconds,
    )
    try:
        await manager.connect()
    except StorageError as e:
        logger.warning(f"MongoDB connection failed: {e.message}", extra={"backend": "mongodb"})
        return None
    return manager


async def _probe_stores(requested: StorageBackend, settings: Settings) -> StoreHandles:
    handles = StoreHandles()
    probes = stores_to_probe(requested)
    if StorageBackend.POSTGRES in probes:
        handles.postgres = await open_postgres(settings)
    if StorageBackend.MONGODB in probes:
        handles.mongodb = await open_mongodb(settings)
    return handles


async def open_user_storage(settings: Settings) -> UserStorage:
    """Probe, resolve, construct and (optionally) wrap the user repository."""
    requested = settings.storage_backend
    handles = await _probe_stores(requested, settings)
    backend = resolve_backend(
        requested,
        postgres_available=handles.postgres is not None,
        mongodb_available=handles.mongodb is not None,
    )
    if requested not in (StorageBackend.AUTO, backend):
        logger.warning(
            f"Requested backend '{requested.value}' unavailable, "
            f"falling back to '{backend.value}'",
            extra={"backend": backend.value},
        )

    repository, health_check = REPOSITORY_CONSTRUCTORS[backend](handles)
    storage = UserStorage(repository=repository, backend=backend, health_check=health_check)

    # Close every opened client, including probed ones the backend does not use
    if handles.postgres is not None:
        storage.closers.append(handles.postgres.close)
    if handles.mongodb is not None:
        storage.closers.append(handles.mongodb.close)

    if isinstance(repository, MongoUserRepository):
        try:
            await repository.ensure_indexes()
        except StorageError as e:
            logger.warning(f"MongoDB index creation failed: {e.message}")

    if settings.cache_enabled:
        await _attach_cache(storage, settings)

    logger.info(
        f"User storage ready: {backend.value}"
        + (" (cached)" if storage.cached else ""),
        extra={"backend": backend.value},
    )
    return storage


async def _attach_cache(storage: UserStorage, settings: Settings) -> None:
    try:
        client = await connect_redis(settings.redis_url, settings.connect_timeout_seconds)
    except CacheUnavailableError as e:
        logger.warning(f"Redis connection failed, cache disabled: {e.message}")
        return
    storage.repository = CachingUserRepository(
        storage.repository, RedisUserCache(client), settings.cache_ttl_seconds,
    )
    storage.cached = True
    storage.closers.append(client.aclose)
