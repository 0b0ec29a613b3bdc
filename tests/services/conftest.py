"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - File-backed SQLite instead of :memory: so two sessions really use two
      connections (needed by the optimistic-locking tests)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from devconnect.db.base import Base
from devconnect.infrastructure.database import get_db, DatabaseSessionManager
import devconnect.infrastructure.database as db_module
import devconnect.models  # noqa: F401
from devconnect.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'devconnect.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
def register(client):
    """Register a user through the API.

    Returns an async callable -> {"id", "token", "headers", "email"}.
    """
    counter = {"n": 0}

    async def _register(name: str = "Dev", email: str | None = None,
                        password: str = "secret123") -> dict:
        counter["n"] += 1
        email = email or f"dev{counter['n']}@example.com"
        res = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert res.status_code == 201, res.text
        token = res.json()["token"]
        headers = {"x-auth-token": token}
        me = await client.get("/api/auth", headers=headers)
        return {
            "id": me.json()["id"], "token": token,
            "headers": headers, "email": email,
        }

    return _register


@pytest.fixture
async def alice(register):
    return await register("Alice", "alice@example.com")


@pytest.fixture
async def bob(register):
    return await register("Bob", "bob@example.com")


@pytest.fixture
def profile_body():
    return {
        "status": "Developer",
        "skills": "python, fastapi ,  sql",
        "company": "Acme",
        "bio": "Writes code",
        "githubusername": "alice-gh",
        "twitter": "https://twitter.com/alice",
    }
