"""Async database engine and session factory."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from ...core.config import settings
from ...core.observability import get_logger

logger = get_logger(__name__)


def build_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create an async engine for ``url`` (defaults to ``DATABASE_URL``)."""
    return create_async_engine(
        url or settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO if echo is None else echo,
        pool_pre_ping=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async_engine = build_engine()
AsyncSessionLocal = build_session_factory(async_engine)


async def create_tables(engine: AsyncEngine = async_engine) -> None:
    """Create all tables that do not exist yet."""
    # Registers the table models on SQLModel.metadata
    from . import sqlmodel_entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ensured")


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that is closed after the request."""
    async with AsyncSessionLocal() as session:
        yield session
