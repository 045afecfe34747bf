"""Database client handle owning the engine for the lifetime of a run."""
import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from userops import config
from userops.db.engine import init_orm, make_engine, make_session_factory
from userops.domain import NewUser, User
from userops.repository.users import UsersRepository

logger = logging.getLogger(__name__)


class DatabaseClient:
    """Open connection to the users database.

    Use ``async with DatabaseClient(engine) as client`` for scoped acquisition,
    or call `connect` / `disconnect` explicitly.
    """

    def __init__(self, engine: AsyncEngine, create_schema: bool = False):
        self.engine = engine
        self.create_schema = create_schema
        self.user = UsersRepository(make_session_factory(engine))
        self._connected = False
        self._disconnected = False

    @classmethod
    def from_url(cls, database_url: Optional[str] = None, create_schema: bool = False, echo: bool = False) -> "DatabaseClient":
        return cls(make_engine(database_url, echo=echo), create_schema=create_schema)

    @classmethod
    def from_config(cls) -> "DatabaseClient":
        return cls.from_url(config.database_url(), create_schema=config.create_schema(), echo=config.sql_echo())

    @property
    def is_disconnected(self) -> bool:
        return self._disconnected

    async def connect(self) -> None:
        if self._connected:
            return
        if self._disconnected:
            raise RuntimeError("client already disconnected")
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        if self.create_schema:
            await init_orm(self.engine)
        self._connected = True
        logger.info("Connected to %s", self.engine.url.render_as_string(hide_password=True))

    async def create_user(self, data: NewUser) -> User:
        return await self.user.create_user(data)

    async def delete_user_by_email(self, email: str) -> User:
        return await self.user.delete_user_by_email(email)

    async def disconnect(self) -> None:
        if self._disconnected:
            return
        self._disconnected = True
        await self.engine.dispose()
        logger.info("Disconnected")

    async def __aenter__(self) -> "DatabaseClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
