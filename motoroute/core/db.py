from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from motoroute.config import get_settings

# SQLAlchemy declarative base for models
Base = declarative_base()


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    db_settings = get_settings().database
    return create_async_engine(
        db_settings.url,
        echo=db_settings.echo,
        pool_pre_ping=db_settings.pool_pre_ping,
        future=True,
    )


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(), autoflush=False, expire_on_commit=False
    )


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    session = get_sessionmaker()()
    try:
        yield session
    finally:
        await session.close()
