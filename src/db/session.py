"""Database engine and the per-request session dependency."""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import get_settings


settings = get_settings()

# One pool per process; pre-ping drops connections Postgres closed while idle
engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

# expire_on_commit is off so routers can serialize users and bookmarks
# after the commit without another round trip.
async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    FastAPI dependency giving each request one session and one transaction.

    Services only flush, so their writes become visible to other requests
    when the handler returns and this commits.
    An exception anywhere in the handler rolls the whole request back,
    including savepoints the services opened for uniqueness checks.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
