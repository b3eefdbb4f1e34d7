"""User Service — validates requests and delegates persistence to a UserRepository.

Invariants:
    - create_user requires non-empty name and email
    - get/update/delete require a positive id within signed 64-bit range
    - Validation happens before any repository call
    - Repository errors (UserNotFoundError, StorageError) pass through untouched
"""

import logging

from user_service.core.enforce_user_input import check_user_id, validate_create_fields
from user_service.core.repository_protocols import UserRepository
from user_service.core.user_entity import User
from user_service.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _raise_if(error: Exception | None) -> None:
    if error is not None:
        raise error


class UserService:
    """CRUD orchestration for users."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def create_user(self, request: UserCreate) -> User:
        _raise_if(validate_create_fields(request.name, request.email))
        user = await self.repository.create(request.name.strip(), request.email.strip())
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def get_user(self, user_id: int) -> User:
        _raise_if(check_user_id(user_id))
        return await self.repository.get_by_id(user_id)

    async def list_users(self) -> list[User]:
        return await self.repository.get_all()

    async def update_user(self, user_id: int, request: UserUpdate) -> User:
        _raise_if(check_user_id(user_id))
        user = await self.repository.update(user_id, request.to_changes())
        logger.info("User updated", extra={"user_id": user_id})
        return user

    async def delete_user(self, user_id: int) -> None:
        _raise_if(check_user_id(user_id))
        await self.repository.delete(user_id)
        logger.info("User deleted", extra={"user_id": user_id})
