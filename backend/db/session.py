"""Async engine and session factory."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from core.config import settings

async_engine = create_async_engine(settings.database_url, pool_pre_ping=True)
AsyncSessionMaker = async_sessionmaker(async_engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the application engine."""
    async with AsyncSessionMaker() as session:
        yield session


async def init_db() -> None:
    """Create any missing tables for the registered models."""
    import models  # noqa: F401

    async with async_engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
