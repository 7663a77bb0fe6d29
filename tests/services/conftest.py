"""Service test fixtures — async DB, FastAPI test client and an in-memory repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - fake_repository satisfies UserRepository without any IO

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - StaticPool: every session shares the one in-memory connection
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from user_registry.db.base import Base
from user_registry.infrastructure.database import get_db, DatabaseSessionManager
from user_registry.models.user import User
import user_registry.infrastructure.database as db_module
from user_registry.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_users(test_db):
    """Insert two already-normalized users directly into the test DB."""
    users = [
        User(
            name="MARIA SILVA", age=30,
            email="maria@example.com", phone_number="11999990001",
        ),
        User(
            name="JOAO SOUZA", age=41,
            email="joao@example.com", phone_number="11999990002",
        ),
    ]
    test_db.add_all(users)
    await test_db.commit()
    for user in users:
        await test_db.refresh(user)
    return users


# ─── In-memory repository ───────────────────────────────────────

@dataclass
class FakeUser:
    name: str
    age: int
    email: str
    phone_number: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class FakeUserRepository:
    """UserRepository over a plain list; records every call."""

    def __init__(self, users=None):
        self.users = list(users or [])
        self.calls = []

    async def list_all(self):
        self.calls.append("list_all")
        return list(self.users)

    async def get(self, user_id):
        self.calls.append("get")
        return next((u for u in self.users if u.id == user_id), None)

    async def get_by_email(self, email):
        self.calls.append("get_by_email")
        return next((u for u in self.users if u.email == email), None)

    async def get_by_phone_number(self, phone_number):
        self.calls.append("get_by_phone_number")
        return next(
            (u for u in self.users if u.phone_number == phone_number), None,
        )

    async def create(self, *, name, age, email, phone_number):
        self.calls.append("create")
        user = FakeUser(
            name=name, age=age, email=email, phone_number=phone_number,
        )
        self.users.append(user)
        return user

    async def update(self, user, *, name, age, email, phone_number):
        self.calls.append("update")
        user.name = name
        user.age = age
        user.email = email
        user.phone_number = phone_number
        return user

    async def delete(self, user):
        self.calls.append("delete")
        self.users.remove(user)


@pytest.fixture
def fake_repository():
    return FakeUserRepository([
        FakeUser(
            name="MARIA SILVA", age=30,
            email="maria@example.com", phone_number="11999990001",
        ),
        FakeUser(
            name="MARIA CLARA", age=22,
            email="clara@example.com", phone_number="11999990003",
        ),
        FakeUser(
            name="JOAO SOUZA", age=41,
            email="joao@example.com", phone_number="11999990002",
        ),
    ])
