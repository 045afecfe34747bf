from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from userops import config
from userops.db.models import Base


def make_engine(database_url: Optional[str] = None, echo: bool = False) -> AsyncEngine:
    """Create an async SQLAlchemy Engine for `database_url`.

    Falls back to ``DATABASE_URL`` from the environment. The URL must name an
    async driver, e.g. ``sqlite+aiosqlite://`` or ``postgresql+asyncpg://``.
    """
    database_url = database_url or config.database_url()
    if not database_url:
        raise RuntimeError("DATABASE_URL not set")
    return create_async_engine(database_url, echo=echo)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, expire_on_commit=False)


async def init_orm(engine: AsyncEngine) -> None:
    """Create the tables if they do not already exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
