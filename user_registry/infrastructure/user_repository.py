"""User Repository — SQLAlchemy implementation of core UserRepository protocol.

Invariants:
    - Repository flushes but never commits: the route layer owns the transaction boundary
    - IntegrityError on flush is rolled back and raised as UniqueConstraintError
    - Only update tags the error with a user_id; on create the id is assigned by the flush itself
    - list_all returns users oldest first

Design Decisions:
    - Flush inside create/update so constraint violations surface here, next to
      the write that caused them, instead of at the route's commit
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from user_registry.core.domain_types import UserId
from user_registry.core.errors import ErrorContext, UniqueConstraintError
from user_registry.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> Sequence[User]:
        result = await self.db.execute(
            select(User).order_by(User.created_at, User.id),
        )
        return result.scalars().all()

    async def get(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email),
        )
        return result.scalar_one_or_none()

    async def get_by_phone_number(self, phone_number: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.phone_number == phone_number),
        )
        return result.scalar_one_or_none()

    async def create(
        self, *, name: str, age: int, email: str, phone_number: str,
    ) -> User:
        user = User(
            name=name, age=age, email=email, phone_number=phone_number,
        )
        self.db.add(user)
        await self._flush()
        return user

    async def update(
        self, user: User, *, name: str, age: int, email: str, phone_number: str,
    ) -> User:
        user.name = name
        user.age = age
        user.email = email
        user.phone_number = phone_number
        await self._flush(user.id)
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()

    async def _flush(self, user_id: str | None = None) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Unique constraint rejected user write: {e.orig}",
                extra={"user_id": user_id},
            )
            raise UniqueConstraintError(ErrorContext(user_id=user_id))
