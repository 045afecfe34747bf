import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from userops.db.models import User as DBUser
from userops.domain import NewUser, User
from userops.exceptions import OperationError, UserAlreadyExistsError, UserNotFoundError

logger = logging.getLogger(__name__)


class UsersRepository:
    """Repository for User database operations.

    Requires an explicit `session_factory` (callable returning an `AsyncSession`).
    Every method opens its own session and commits at most once.
    """
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def get_session(self) -> AsyncSession:
        return self.session_factory()

    @staticmethod
    def _to_domain(db_user: DBUser) -> User:
        return User(
            user_id=db_user.id,
            name=db_user.name,
            age=db_user.age,
            email=db_user.email,
        )

    async def create_user(self, data: NewUser) -> User:
        async with self.get_session() as session:
            u = DBUser(name=data.name, age=data.age, email=data.email)
            session.add(u)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                # Only the email index is unique; re-query to tell it apart from NOT NULL failures.
                q = select(DBUser.id).where(DBUser.email == data.email)
                if (await session.execute(q)).first() is not None:
                    raise UserAlreadyExistsError(data.email, original=e) from e
                raise OperationError("create", str(e.orig), original=e) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise OperationError("create", str(e), original=e) from e
            await session.refresh(u)
            logger.info("Created user id=%s email=%s", u.id, u.email)
            return self._to_domain(u)

    async def delete_user_by_email(self, email: str) -> User:
        async with self.get_session() as session:
            try:
                q = select(DBUser).where(DBUser.email == email)
                u = (await session.execute(q)).scalars().first()
                if u is None:
                    raise UserNotFoundError(email)
                deleted = self._to_domain(u)
                await session.delete(u)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise OperationError("delete", str(e), original=e) from e
            logger.info("Deleted user id=%s email=%s", deleted.user_id, deleted.email)
            return deleted

    async def get_user_by_email(self, email: str) -> Optional[User]:
        async with self.get_session() as session:
            q = select(DBUser).where(DBUser.email == email)
            u = (await session.execute(q)).scalars().first()
            if not u:
                return None
            return self._to_domain(u)
