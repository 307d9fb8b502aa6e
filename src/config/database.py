import contextlib
from collections.abc import AsyncIterator, Callable
from typing import AsyncContextManager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.config.settings import settings

SessionManager = Callable[..., AsyncContextManager[AsyncSession]]


def create_engine(url: str, **kwargs):
    url = str(url)
    connect_args = {}
    if "sqlite" in url:
        connect_args = {"timeout": 15}
    return create_async_engine(
        url,
        echo=settings.LOG_DB,
        connect_args=connect_args,
        **kwargs,
    )


def make_session_manager(session_maker: async_sessionmaker[AsyncSession]) -> SessionManager:
    """Build a session context manager bound to ``session_maker``.

    The session commits when the block exits cleanly and rolls back on any
    exception, which is then re-raised.
    """

    @contextlib.asynccontextmanager
    async def session_manager(
        auto_commit=True, session_overwrite: AsyncSession | None = None
    ) -> AsyncIterator[AsyncSession]:
        if session_overwrite:
            yield session_overwrite
        else:
            async with session_maker() as session:
                try:
                    yield session
                except Exception as e:
                    await session.rollback()
                    raise e
                else:
                    if auto_commit:
                        await session.commit()

    return session_manager


engine = create_engine(settings.database_url)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

async_session_manager = make_session_manager(async_session_maker)
