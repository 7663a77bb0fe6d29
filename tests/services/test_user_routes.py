"""Users Routes — end-to-end CRUD through the ASGI app on SQLite.

Invariants:
    - POST /users returns 201 with the normalized user, 409 on duplicates
    - PUT /users/{id} returns 200 message, 404 when missing, 400 on duplicates
    - DELETE /users/{id} returns 200 message, 404 when missing
    - lookup routes return 404 with the error envelope when nothing matches
    - storage-level conflicts answer 409, an unreachable database 503
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import select

import user_registry.infrastructure.database as db_module
from user_registry.infrastructure.database import DatabaseSessionManager, get_db
from user_registry.infrastructure.user_repository import SqlUserRepository
from user_registry.main import app
from user_registry.models.user import User

NEW_USER = {
    "name": "Ana Lima",
    "age": 25,
    "email": "Ana.Lima@Example.com",
    "phoneNumber": "11999990009",
}


# ─── GET /users ──────────────────────────────────────────────────

async def test_list_users_empty(client):
    res = await client.get("/users")
    assert res.status_code == 200
    assert res.json() == []


async def test_list_users_returns_camel_case(client, seed_users):
    res = await client.get("/users")
    assert res.status_code == 200
    body = res.json()
    assert {u["email"] for u in body} == {"maria@example.com", "joao@example.com"}
    assert set(body[0]) == {"id", "name", "age", "email", "phoneNumber", "createdAt"}


async def test_list_users_oldest_first(client, test_db):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    # inserted newest first so insertion order and age disagree
    for i in reversed(range(5)):
        test_db.add(User(
            name=f"U{i}", age=20 + i,
            email=f"u{i}@example.com", phone_number=f"1100000000{i}",
            created_at=base + timedelta(minutes=i),
        ))
    await test_db.commit()

    res = await client.get("/users")
    assert res.status_code == 200
    assert [u["name"] for u in res.json()] == ["U0", "U1", "U2", "U3", "U4"]


# ─── GET /users/{id} ─────────────────────────────────────────────

async def test_get_user_by_id(client, seed_users):
    res = await client.get(f"/users/{seed_users[0].id}")
    assert res.status_code == 200
    assert res.json()["name"] == "MARIA SILVA"


async def test_get_user_by_unknown_id_returns_404(client):
    res = await client.get("/users/not-a-real-id")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# ─── GET /users-first-name/{first_name} ──────────────────────────

async def test_users_by_first_name(client, seed_users):
    res = await client.get("/users-first-name/maria")
    assert res.status_code == 200
    assert [u["email"] for u in res.json()] == ["maria@example.com"]


async def test_users_by_first_name_none_returns_404(client, seed_users):
    res = await client.get("/users-first-name/silva")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "No user found with first name 'SILVA'"


# ─── GET /users-email/{email} ────────────────────────────────────

async def test_user_by_email_is_case_insensitive(client, seed_users):
    res = await client.get("/users-email/JOAO@Example.com")
    assert res.status_code == 200
    assert res.json()["phoneNumber"] == "11999990002"


async def test_user_by_email_missing_returns_404(client, seed_users):
    res = await client.get("/users-email/nobody@example.com")
    assert res.status_code == 404


# ─── POST /users ─────────────────────────────────────────────────

async def test_create_user_returns_201_normalized(client, test_db):
    res = await client.post("/users", json=NEW_USER)
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "ANA LIMA"
    assert body["email"] == "ana.lima@example.com"
    assert body["phoneNumber"] == "11999990009"
    assert body["id"]

    stored = await test_db.get(User, body["id"])
    assert stored is not None
    assert stored.email == "ana.lima@example.com"


async def test_create_user_duplicate_email_returns_409(client, seed_users):
    res = await client.post(
        "/users", json={**NEW_USER, "email": "MARIA@example.com"},
    )
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_EMAIL"
    assert error["context"]["field"] == "email"


async def test_create_user_duplicate_phone_returns_409(client, seed_users):
    res = await client.post(
        "/users", json={**NEW_USER, "phoneNumber": "11999990002"},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_PHONE_NUMBER"


async def test_create_user_missing_field_returns_400(client):
    res = await client.post("/users", json={"name": "Ana"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"] == "body.age" for d in error["details"])


# ─── PUT /users/{id} ─────────────────────────────────────────────

async def test_update_user_returns_message(client, seed_users, test_db):
    target = seed_users[0]
    res = await client.put(f"/users/{target.id}", json=NEW_USER)
    assert res.status_code == 200
    assert res.json() == {"message": "User data updated successfully"}

    await test_db.refresh(target)
    assert target.name == "ANA LIMA"
    assert target.email == "ana.lima@example.com"


async def test_update_user_keeping_own_email(client, seed_users):
    target = seed_users[0]
    res = await client.put(f"/users/{target.id}", json={
        "name": "Maria Silva", "age": 31,
        "email": "maria@example.com", "phoneNumber": "11999990001",
    })
    assert res.status_code == 200


async def test_update_user_email_of_other_user_returns_400(client, seed_users):
    res = await client.put(
        f"/users/{seed_users[0].id}",
        json={**NEW_USER, "email": "joao@example.com"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_EMAIL"


async def test_update_user_phone_of_other_user_returns_400(client, seed_users):
    res = await client.put(
        f"/users/{seed_users[0].id}",
        json={**NEW_USER, "phoneNumber": "11999990002"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_PHONE_NUMBER"


async def test_update_missing_user_returns_404(client, seed_users):
    res = await client.put("/users/missing", json=NEW_USER)
    assert res.status_code == 404


# ─── DELETE /users/{id} ──────────────────────────────────────────

async def test_delete_user_returns_message(client, seed_users, test_db):
    target_id = seed_users[1].id
    res = await client.delete(f"/users/{target_id}")
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted successfully"}

    result = await test_db.execute(select(User).where(User.id == target_id))
    assert result.scalar_one_or_none() is None


async def test_delete_missing_user_returns_404(client):
    res = await client.delete("/users/missing")
    assert res.status_code == 404


# ─── storage-level failures ──────────────────────────────────────

async def _no_user(self, *args):
    return None


async def _no_users(self):
    return []


async def test_create_racing_duplicate_returns_409(client, seed_users, monkeypatch):
    """Email pre-check misses a concurrent insert; the UNIQUE constraint answers."""
    monkeypatch.setattr(SqlUserRepository, "get_by_email", _no_user)
    res = await client.post(
        "/users", json={**NEW_USER, "email": "maria@example.com"},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "UNIQUE_CONSTRAINT_VIOLATED"


async def test_update_racing_duplicate_returns_409(client, seed_users, monkeypatch):
    monkeypatch.setattr(SqlUserRepository, "list_all", _no_users)
    target_id = seed_users[0].id
    res = await client.put(
        f"/users/{target_id}", json={**NEW_USER, "email": "joao@example.com"},
    )
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "UNIQUE_CONSTRAINT_VIOLATED"
    assert error["context"]["user_id"] == target_id


async def test_unreachable_database_returns_503(client, monkeypatch):
    """Real get_db over an engine whose file cannot be opened."""
    app.dependency_overrides.pop(get_db, None)
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:////nonexistent_dir/users.db",
    )
    monkeypatch.setattr(db_module, "db_manager", manager)
    try:
        for method, path in (
            ("GET", "/users"), ("GET", "/users/abc"), ("DELETE", "/users/abc"),
        ):
            res = await client.request(method, path)
            assert res.status_code == 503, path
            assert res.json()["error"]["code"] == "DATABASE_ERROR"
    finally:
        await manager.dispose()
