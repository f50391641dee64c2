"""Pytest configuration and shared fixtures for API and service tests."""

import os
from datetime import datetime, timedelta, timezone

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test DB before app imports so config/engine use it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_typing_api.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

from typing_api.core.auth import create_session_token, hash_password
from typing_api.db.base import Base
from typing_api.db.session import async_session_maker, engine, init_db
from typing_api.main import app
from typing_api.models.preset import TestPreset
from typing_api.models.user import User

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def seconds_since_base(cursor: datetime | str) -> int:
    """Cursor -> seconds after BASE_TIME. SQLite hands back naive datetimes, treat them as UTC."""
    if isinstance(cursor, str):
        cursor = datetime.fromisoformat(cursor)
    if cursor.tzinfo is None:
        cursor = cursor.replace(tzinfo=timezone.utc)
    return int((cursor - BASE_TIME).total_seconds())


async def insert_presets(seconds: list[int], user_id: int | None = None, **fields) -> list[int]:
    """Insert presets created BASE_TIME + s for each s; return their ids."""
    values = {"type": "TIME", "language": "ENGLISH", "time": 30, "punctuated": False}
    values.update(fields)
    async with async_session_maker() as session:
        rows = [
            TestPreset(user_id=user_id, created_at=BASE_TIME + timedelta(seconds=s), **values)
            for s in seconds
        ]
        session.add_all(rows)
        await session.commit()
        return [row.id for row in rows]


@pytest_asyncio.fixture
async def ensure_db():
    """Create tables; drop pooled connections afterwards so each test's event loop starts fresh."""
    await init_db()
    yield
    await engine.dispose()


async def _clear_all():
    """Delete all rows in reverse dependency order so tests start clean."""
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest_asyncio.fixture
async def clean_db(ensure_db):
    await _clear_all()
    yield


@pytest_asyncio.fixture
async def client(clean_db):
    """Yield AsyncClient against the app on a clean database."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(clean_db):
    """Create a user via DB (committed) and return (user_id, username, session_token)."""
    async with async_session_maker() as session:
        user = User(
            username="typist",
            email="typist@test.com",
            password_hash=hash_password("password123"),
            image="https://example.com/typist.png",
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        token = create_session_token(user.id, user.username)
        return user.id, user.username, token


@pytest_asyncio.fixture
def auth_headers(test_user):
    """Cookie header carrying test_user's session token."""
    _, __, token = test_user
    return {"Cookie": f"theme=dark; session={token}"}
