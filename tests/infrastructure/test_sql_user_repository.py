"""SqlUserRepository & DatabaseSessionManager — relational specifics.

Invariants:
    - Email uniqueness enforced by the schema → StorageError (503), not a crash
    - A failed write rolls back; the store stays usable
    - Driver-level failures map to StorageError
    - health_check reports connectivity as a bool
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from user_service.core.enforce_user_input import MAX_USER_ID
from user_service.core.errors import StorageError, UserNotFoundError, UserValidationError
from user_service.core.user_entity import UserChanges
from user_service.models.user import UserRecord
from user_service.services.user_service import UserService


async def test_duplicate_email_raises_storage_error(sql_repo):
    await sql_repo.create("A", "same@x.com")
    with pytest.raises(StorageError) as exc_info:
        await sql_repo.create("B", "same@x.com")
    assert exc_info.value.code == "STORAGE_ERROR"
    assert exc_info.value.http_status == 503
    assert exc_info.value.operation == "commit"


async def test_store_usable_after_integrity_failure(sql_repo):
    await sql_repo.create("A", "same@x.com")
    with pytest.raises(StorageError):
        await sql_repo.create("B", "same@x.com")
    c = await sql_repo.create("C", "c@x.com")
    assert [u.email for u in await sql_repo.get_all()] == ["same@x.com", c.email]


async def test_update_to_taken_email_raises_storage_error(sql_repo):
    await sql_repo.create("A", "a@x.com")
    b = await sql_repo.create("B", "b@x.com")
    with pytest.raises(StorageError):
        await sql_repo.update(b.id, UserChanges(email="a@x.com"))
    assert (await sql_repo.get_by_id(b.id)).email == "b@x.com"


async def test_create_persists_row(sql_repo, db_manager):
    user = await sql_repo.create("Ann", "ann@x.com")
    async with db_manager.session() as db:
        result = await db.execute(select(UserRecord).where(UserRecord.id == user.id))
        row = result.scalar_one()
    assert (row.name, row.email) == ("Ann", "ann@x.com")


async def test_session_maps_operational_error(db_manager):
    with pytest.raises(StorageError) as exc_info:
        async with db_manager.session():
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))
    assert exc_info.value.operation == "execute"


async def test_session_lets_domain_errors_through(db_manager):
    with pytest.raises(UserNotFoundError):
        async with db_manager.session():
            raise UserNotFoundError(7)


async def test_health_check_true_when_connected(db_manager):
    assert await db_manager.health_check() is True


async def test_health_check_false_when_unreachable(tmp_path):
    from user_service.infrastructure.database import DatabaseSessionManager

    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/db.sqlite")
    assert await manager.health_check() is False
    await manager.close()


async def test_create_tables_is_idempotent(tmp_path):
    from user_service.infrastructure.database import DatabaseSessionManager

    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/users.sqlite")
    await manager.create_tables()
    await manager.create_tables()
    assert await manager.health_check() is True
    await manager.close()


async def test_largest_valid_id_reaches_store_as_not_found(sql_repo):
    with pytest.raises(UserNotFoundError):
        await sql_repo.get_by_id(MAX_USER_ID)


async def test_service_rejects_id_beyond_column_range(sql_repo):
    with pytest.raises(UserValidationError):
        await UserService(sql_repo).get_user(2**70)
