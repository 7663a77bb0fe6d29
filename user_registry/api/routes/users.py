"""Users Routes — CRUD endpoints over the user registry.

Invariants:
    - Routes never contain business logic (delegate to UserService)
    - Routes own the transaction boundary: commit after a successful write
    - Domain errors propagate to the global UserRegistryError handler

Design Decisions:
    - Lookup paths (/users-first-name, /users-email) kept as sibling routes of
      /users rather than query parameters: existing clients call them directly
    - Update and delete answer with a message, create answers with the user
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_registry.core.domain_types import UserId
from user_registry.infrastructure.database import get_db
from user_registry.infrastructure.user_repository import SqlUserRepository
from user_registry.schemas.user import (
    MessageResponse, UserCreate, UserResponse, UserUpdate,
)
from user_registry.services.user_service import UserService

router = APIRouter(tags=["users"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlUserRepository(db))


@router.get("/users", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """List every registered user."""
    return await service.list_users()


@router.get("/users-first-name/{first_name}", response_model=list[UserResponse])
async def list_users_by_first_name(
    first_name: str, service: UserService = Depends(get_user_service),
):
    """List users whose first name matches (case-insensitive)."""
    return await service.find_by_first_name(first_name)


@router.get("/users-email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str, service: UserService = Depends(get_user_service),
):
    return await service.find_by_email(email)


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    return await service.get_user(UserId(user_id))


@router.post(
    "/users", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    """Register a new user. Email and phone number must be unused."""
    user = await service.create_user(body)
    await db.commit()
    return user


@router.put("/users/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    """Replace a user's data. Email and phone number must not belong to another user."""
    await service.update_user(UserId(user_id), body)
    await db.commit()
    return MessageResponse(message="User data updated successfully")


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(UserId(user_id))
    await db.commit()
    return MessageResponse(message="User deleted successfully")
