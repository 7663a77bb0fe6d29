"""User Service — lookup, uniqueness and normalization rules for the users API.

Invariants:
    - Names are upper-cased and emails lower-cased before every write and lookup
    - Create checks email then phone number via unique lookups (409 on conflict)
    - Update scans all other users in memory, email then phone number (400 on conflict)
    - Missing users raise ResourceNotFoundError (404)

Design Decisions:
    - Service over a UserRepository protocol: route tests hit SQLite, service
      tests use an in-memory fake
    - Service does NOT commit: the route layer owns the transaction boundary
"""

import logging
from typing import Sequence

from user_registry.core.domain_types import UserField, UserId, UserLookup
from user_registry.core.errors import (
    DuplicateFieldError, ErrorContext, ResourceNotFoundError,
)
from user_registry.core.normalize_user import (
    filter_by_first_name, find_taken_field, normalize_email, normalize_name,
)
from user_registry.core.repository_protocols import UserLike, UserRepository
from user_registry.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """CRUD operations on users over a UserRepository."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list_users(self) -> Sequence[UserLike]:
        return await self.repository.list_all()

    async def get_user(self, user_id: UserId) -> UserLike:
        """Get user or raise 404."""
        user = await self.repository.get(user_id)
        if user is None:
            raise ResourceNotFoundError(
                "User", user_id, context=ErrorContext(user_id=user_id),
            )
        return user

    async def find_by_first_name(self, first_name: str) -> list[UserLike]:
        """Users whose first name matches; 404 if there are none."""
        users = filter_by_first_name(
            await self.repository.list_all(), first_name,
        )
        if not users:
            raise ResourceNotFoundError(
                "User", normalize_name(first_name), UserLookup.FIRST_NAME,
            )
        return users

    async def find_by_email(self, email: str) -> UserLike:
        email = normalize_email(email)
        user = await self.repository.get_by_email(email)
        if user is None:
            raise ResourceNotFoundError("User", email, UserLookup.EMAIL)
        return user

    async def create_user(self, data: UserCreate) -> UserLike:
        email = normalize_email(data.email)
        if await self.repository.get_by_email(email):
            raise DuplicateFieldError(UserField.EMAIL, http_status=409)
        if await self.repository.get_by_phone_number(data.phone_number):
            raise DuplicateFieldError(UserField.PHONE_NUMBER, http_status=409)

        user = await self.repository.create(
            name=normalize_name(data.name),
            age=data.age,
            email=email,
            phone_number=data.phone_number,
        )
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update_user(self, user_id: UserId, data: UserUpdate) -> UserLike:
        """Replace every field of an existing user."""
        user = await self.get_user(user_id)

        taken = find_taken_field(
            await self.repository.list_all(),
            data.email, data.phone_number, exclude_id=user_id,
        )
        if taken is not None:
            raise DuplicateFieldError(
                taken, http_status=400, context=ErrorContext(user_id=user_id),
            )

        user = await self.repository.update(
            user,
            name=normalize_name(data.name),
            age=data.age,
            email=normalize_email(data.email),
            phone_number=data.phone_number,
        )
        logger.info("User updated", extra={"user_id": user_id})
        return user

    async def delete_user(self, user_id: UserId) -> None:
        user = await self.get_user(user_id)
        await self.repository.delete(user)
        logger.info("User deleted", extra={"user_id": user_id})
