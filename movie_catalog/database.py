import os

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def _ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return
    if url.database in (None, "", ":memory:"):
        return
    directory = os.path.dirname(os.path.abspath(url.database))
    os.makedirs(directory, exist_ok=True)


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine, making room for a local SQLite file if needed."""
    _ensure_sqlite_directory(database_url)
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine):
    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables."""
    # Register the mapped classes on Base.metadata before create_all.
    from movie_catalog import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db_session(request: Request):
    """Dependency for getting a database session."""
    async with request.app.state.session_factory() as session:
        yield session
