import pytest
from sqlalchemy import select

from dashboard.database import ensure_database_exists
from dashboard.models import User
from dashboard.security import get_password_hash, verify_password


def test_password_hash_round_trip():
    hashed = get_password_hash("correct horse")
    assert hashed.startswith("$argon2")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_unknown_hash_format_is_rejected():
    assert verify_password("anything", "plain-text-password") is False


async def _stored_password(session_factory, email):
    async with session_factory() as session:
        return await session.scalar(select(User.password).where(User.email == email))


@pytest.mark.anyio
async def test_api_stores_hashes(client, make_user, session_factory):
    user = make_user(email="hash@example.com", password="first-password")
    stored = await _stored_password(session_factory, "hash@example.com")
    assert stored != "first-password"
    assert verify_password("first-password", stored)

    client.put(f"/api/users/{user['id']}", json={"password": "second-password"})
    stored = await _stored_password(session_factory, "hash@example.com")
    assert verify_password("second-password", stored)
    assert not verify_password("first-password", stored)


def test_ensure_database_exists_ignores_sqlite():
    assert ensure_database_exists("sqlite+aiosqlite:///./dashboard.db") is False
