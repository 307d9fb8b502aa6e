from collections.abc import AsyncIterator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.config.database import SessionManager, make_session_manager
from src.guests.repository import orm_models  # noqa: F401  registers guests tables
from src.main import app
from src.models import BaseModel

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def client_factory() -> AsyncIterator[Callable[[dict], AsyncClient]]:
    """Build a test client with FastAPI dependency overrides.

    Usage: ``async with client_factory({get_x_model: lambda: fake}) as client``.
    """

    def factory(overrides: dict | None = None) -> AsyncClient:
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://test")

    yield factory

    app.dependency_overrides.clear()


@pytest.fixture
async def client(client_factory) -> AsyncIterator[AsyncClient]:
    async with client_factory({}) as ac:
        yield ac


@pytest.fixture
async def session_manager() -> AsyncIterator[SessionManager]:
    """Session manager bound to a fresh in-memory sqlite database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield make_session_manager(async_sessionmaker(engine, expire_on_commit=False))

    await engine.dispose()
