"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, lets tests pass an in-memory fake
    - Async in Protocol: implementations do IO; the pure helpers in
      core/normalize_user.py never await anything
"""

from datetime import datetime
from typing import Protocol, Sequence

from user_registry.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for User objects passed between layers.

    Avoids coupling core helpers and the service to the ORM model.
    """
    id: str
    name: str
    age: int
    email: str
    phone_number: str
    created_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence — implemented by infrastructure/user_repository.py."""
    async def list_all(self) -> Sequence[UserLike]: ...
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def get_by_phone_number(self, phone_number: str) -> UserLike | None: ...
    async def create(
        self, *, name: str, age: int, email: str, phone_number: str,
    ) -> UserLike: ...
    async def update(
        self, user: UserLike, *, name: str, age: int, email: str, phone_number: str,
    ) -> UserLike: ...
    async def delete(self, user: UserLike) -> None: ...
