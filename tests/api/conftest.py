"""API test fixtures — FastAPI app with a fresh in-memory UserStorage.

Invariants:
    - Every test gets a fresh InMemoryUserRepository
    - get_user_service / get_user_storage overridden; the lifespan is not run

Design Decisions:
    - Dependency overrides instead of lifespan: ASGITransport does not send
      lifespan events
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.api.deps import get_user_service, get_user_storage
from user_service.core.domain_types import StorageBackend
from user_service.infrastructure.memory_user_repository import InMemoryUserRepository
from user_service.infrastructure.storage_factory import UserStorage
from user_service.main import app
from user_service.services.user_service import UserService


@pytest.fixture
async def storage():
    return UserStorage(
        repository=InMemoryUserRepository(),
        backend=StorageBackend.MEMORY,
        health_check=AsyncMock(return_value=True),
    )


@pytest.fixture
async def client(storage):
    """FastAPI test client bound to `storage`."""
    service = UserService(storage.repository)
    app.dependency_overrides[get_user_service] = lambda: service
    app.dependency_overrides[get_user_storage] = lambda: storage

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
