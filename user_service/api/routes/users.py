"""User Routes — CRUD endpoints under /api/v1/users.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Path ids parsed as int by FastAPI; positivity checked by UserService
    - Domain errors raised, rendered by the global handlers (404, 400, 503)
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from user_service.api.deps import get_user_service
from user_service.schemas.user import UserCreate, UserResponse, UserUpdate
from user_service.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create a user."""
    return await service.create_user(body)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """List all users (possibly empty)."""
    return await service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int, service: UserService = Depends(get_user_service),
):
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, body: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    """Partially update a user; omitted fields are kept."""
    return await service.update_user(user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int, service: UserService = Depends(get_user_service),
):
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
