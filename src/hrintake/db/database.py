"""Async engine and session factory for the application store."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def async_database_url(url: str) -> str:
    """Rewrite plain driver URLs to their async equivalents."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def create_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    async_url = async_database_url(url)
    engine_kw: dict = {}
    if "sqlite" in async_url:
        if ":memory:" in async_url or async_url.endswith("://"):
            # A single shared connection keeps the in-memory database alive.
            engine_kw = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        else:
            engine_kw = {"connect_args": {"timeout": 30}}
    else:
        engine_kw = {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}
    return create_async_engine(async_url, echo=echo, **engine_kw)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    """Create missing tables."""
    # Imported for its side effect of registering the mapped tables.
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
