"""User ORM — persists a single user record.

Invariants:
    - id is an opaque string primary key (UUID4 text, generated client-side)
    - name stored upper-cased, email stored lower-cased (normalized by services/)
    - email and phone_number are UNIQUE at the storage level

Design Decisions:
    - String(36) id over dialect UUID: ids arrive as raw path strings and are
      never parsed, so any string is a valid lookup key
    - UNIQUE constraints back up the pre-insert existence checks; a violation
      is mapped to UniqueConstraintError by the repository
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from user_registry.db.base import Base


class User(Base):
    """User entity — name, age, email, phone number."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    phone_number: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
