"""Async engine, session factory and the request-scoped session dependency."""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import Pool

from candidate_review.config import settings
from candidate_review.db.base import Base


def build_engine(url: Optional[str] = None, poolclass: Optional[type[Pool]] = None) -> AsyncEngine:
    """
    Create an async engine for ``url`` (defaults to DATABASE_URL).

    Pool sizing only applies to the default queue pool; callers that run
    each job in its own event loop pass ``NullPool``.
    """
    url = url or settings.DATABASE_URL
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if poolclass is not None:
        options["poolclass"] = poolclass
    elif url.startswith("postgresql"):
        options["pool_size"] = settings.DATABASE_POOL_SIZE
        options["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
    return create_async_engine(url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request.

    Handlers commit explicitly; anything left uncommitted when the request
    fails is rolled back.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables in DEBUG; deployed databases are managed by Alembic."""
    if not settings.DEBUG:
        return

    from candidate_review import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
