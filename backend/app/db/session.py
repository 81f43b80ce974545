# backend/app/db/session.py
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings  # NOTE: instance import, NOT class


def create_engine_for(url: str) -> AsyncEngine:
    """
    Async engine for ``url``. SQLite connections get foreign keys switched on
    so ON DELETE CASCADE behaves like it does on MySQL.
    """
    new_engine = create_async_engine(url, echo=False, future=True)

    if new_engine.dialect.name == "sqlite":

        @event.listens_for(new_engine.sync_engine, "connect")
        def _sqlite_fk_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = create_engine_for(settings.DATABASE_URL)

# Session factory
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# FastAPI dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
