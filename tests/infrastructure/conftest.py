"""Infrastructure test fixtures — one fresh store per test for every adapter.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - `repository` is parametrized over memory, sql and mongo adapters so the
      UserRepository contract runs against each
    - fake_redis is an isolated fakeredis server per test

Design Decisions:
    - SQLite in-memory via aiosqlite: no external dependency, exercises the
      real SQLAlchemy adapter code
    - Mongo replaced by tests/infrastructure/fake_mongo.py; the adapter code is real
"""

import pytest
from fakeredis import FakeAsyncRedis, FakeServer
from sqlalchemy.ext.asyncio import create_async_engine

from user_service.db.base import Base
import user_service.models  # noqa: F401
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.infrastructure.memory_user_repository import InMemoryUserRepository
from user_service.infrastructure.mongo_user_repository import MongoUserRepository
from user_service.infrastructure.sql_user_repository import SqlUserRepository

from tests.infrastructure.fake_mongo import FakeDatabase


async def _sqlite_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.fixture
async def test_engine():
    engine = await _sqlite_engine()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
async def memory_repo():
    return InMemoryUserRepository()


@pytest.fixture
async def sql_repo(db_manager):
    return SqlUserRepository(db_manager)


@pytest.fixture
def fake_mongo_db():
    return FakeDatabase()


@pytest.fixture
async def mongo_repo(fake_mongo_db):
    repo = MongoUserRepository(fake_mongo_db)
    await repo.ensure_indexes()
    return repo


@pytest.fixture(params=["memory", "sql", "mongo"])
async def repository(request):
    """Each UserRepository adapter in turn, on a fresh store."""
    if request.param == "memory":
        yield InMemoryUserRepository()
    elif request.param == "sql":
        engine = await _sqlite_engine()
        yield SqlUserRepository(DatabaseSessionManager.from_engine(engine))
        await engine.dispose()
    else:
        repo = MongoUserRepository(FakeDatabase())
        await repo.ensure_indexes()
        yield repo


@pytest.fixture
async def fake_redis():
    client = FakeAsyncRedis(server=FakeServer())
    yield client
    await client.aclose()
