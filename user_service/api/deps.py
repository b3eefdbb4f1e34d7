"""Route Dependencies — resolve startup-built objects from app.state.

Invariants:
    - UserStorage and UserService are created once in the lifespan
    - Routes never construct adapters themselves
"""

from fastapi import Request

from user_service.infrastructure.storage_factory import UserStorage
from user_service.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_user_storage(request: Request) -> UserStorage:
    return request.app.state.user_storage
