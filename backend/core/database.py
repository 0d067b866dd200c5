"""Async database session management.

Query helpers return Results so the API layer maps failures in one place.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, TypeVar

from sqlalchemy import event, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from core.config import settings
from core.errors import (
    AppError,
    Ok,
    Err,
    Result,
    not_found,
    DatabaseErrorMapper,
)

T = TypeVar("T")

engine_kwargs = {
    "echo": settings.LOG_SQL,
}

if "sqlite" not in settings.DATABASE_URL:
    engine_kwargs.update({
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    })

engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)


if engine.dialect.name == "sqlite":
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

Base = declarative_base()

_db_mapper = DatabaseErrorMapper("database")


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency that yields a database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Context manager for scripts running outside a request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def fetch_one(
    session: AsyncSession,
    model: type[T],
    id,
    entity_name: str | None = None,
) -> Result[T, AppError]:
    """Fetch a single entity by primary key.

    Returns:
        Ok(entity) if found
        Err(not_found) if not found
        Err(db_error) on database failure
    """
    name = entity_name or model.__name__
    try:
        result = await session.execute(select(model).where(model.id == id))
        entity = result.scalar_one_or_none()
        if entity is None:
            return not_found(name, id, origin="database.fetch_one")
        return Ok(entity)
    except SQLAlchemyError as e:
        return Err(_db_mapper.map_exception(e))


async def commit(session: AsyncSession) -> Result[None, AppError]:
    """Commit the unit of work, rolling back on failure."""
    try:
        await session.commit()
        return Ok(None)
    except SQLAlchemyError as e:
        await session.rollback()
        return Err(_db_mapper.map_exception(e))
