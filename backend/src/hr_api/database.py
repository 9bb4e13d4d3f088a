"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hr_api.config import get_settings

settings = get_settings()

engine_options: dict[str, Any] = {
    # Never echo SQL statements as they may contain personal data
    "echo": False,
}
if not settings.is_sqlite:
    engine_options.update(
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        # Validate connections before checkout to detect stale connections
        pool_pre_ping=True,
        pool_recycle=3600,
    )

engine = create_async_engine(settings.async_database_url, **engine_options)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency.

    One session, and one transaction, per request: committed when the
    endpoint returns, rolled back when it raises.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
