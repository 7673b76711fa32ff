"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

TEST_SECRET_KEY = "test-secret-key-for-testing-at-least-32-characters-long"

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", TEST_SECRET_KEY)
os.environ.setdefault("DEBUG", "true")

from game_catalog.config import Settings  # noqa: E402
from game_catalog.database import create_tables  # noqa: E402
from game_catalog.main import create_app  # noqa: E402
from game_catalog.models.user import User  # noqa: E402

LoginHelper = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory database and fake upstreams."""
    return Settings(
        _env_file=None,
        debug=True,
        secret_key=TEST_SECRET_KEY,
        database_url="sqlite+aiosqlite://",
        bcrypt_rounds=4,
        algolia_app_id="TESTAPP",
        algolia_api_key="test-search-key",
        blob_store_url="https://blobs.example.test/store",
        blob_store_token="test-blob-token",
        blob_public_url="https://cdn.example.test",
    )


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI]:
    """Application wired to a fresh in-memory database."""
    application = create_app(settings)
    await create_tables(application.state.engine)
    yield application
    application.dependency_overrides.clear()
    await application.state.engine.dispose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session(app: FastAPI) -> AsyncGenerator[AsyncSession]:
    """Database session on the same database the app uses."""
    async with app.state.session_factory() as db:
        yield db


@pytest.fixture
async def owner(session: AsyncSession) -> User:
    """A stored user to own seeded games."""
    user = User(username="owner", hashed_password="not-a-real-hash")
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
def login(client: AsyncClient) -> LoginHelper:
    """Register (if needed) and log in a user, returning auth headers."""

    async def _login(username: str = "player1", password: str = "secret-pass") -> dict[str, str]:
        await client.post("/auth/register", json={"username": username, "password": password})
        response = await client.post(
            "/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
