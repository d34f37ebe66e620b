"""Database engine configuration for the research node service."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from research_node.core.config import Settings


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine shared by every in-flight request."""
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
