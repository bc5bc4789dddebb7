from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings


def connect_args_for(url: str, timeout: int | None = None) -> dict:
    """Driver-specific connect timeout so a dead database fails instead of hanging."""
    timeout = timeout if timeout is not None else settings.DATABASE_CONNECT_TIMEOUT
    parsed = make_url(url)
    backend, driver = parsed.get_backend_name(), parsed.get_driver_name()
    if backend == "sqlite":
        return {"timeout": timeout}
    if backend == "postgresql":
        if driver == "asyncpg":
            return {"timeout": timeout}
        return {"connect_timeout": timeout}
    return {}


def create_sync_engine(url: str) -> Engine:
    """Sync engine for one-shot scripts. Caller must dispose it."""
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args_for(url))


@lru_cache
def get_engine() -> AsyncEngine:
    url = settings.async_database_url
    return create_async_engine(
        url,
        echo=settings.APP_ENV == "development",
        pool_pre_ping=True,
        connect_args=connect_args_for(url),
    )


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_engine(),
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_sessionmaker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
