import asyncio

import pytest
from sqlalchemy import select

from userops.db.engine import init_orm, make_engine, make_session_factory
from userops.db.models import User as DBUser
from userops.domain import NewUser, User
from userops.exceptions import OperationError, UserAlreadyExistsError, UserNotFoundError
from userops.repository.users import UsersRepository


def _run_with_repo(tmp_path, scenario):
    """Run `scenario(repo)` against a fresh file-backed SQLite database."""
    async def _go():
        engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
        try:
            await init_orm(engine)
            repo = UsersRepository(make_session_factory(engine))
            return await scenario(repo)
        finally:
            await engine.dispose()

    return asyncio.run(_go())


def test_create_user_returns_stored_record(tmp_path):
    async def scenario(repo):
        created = await repo.create_user(NewUser(name="Tony", age=46, email="tony@nomail.com"))
        fetched = await repo.get_user_by_email("tony@nomail.com")
        return created, fetched

    created, fetched = _run_with_repo(tmp_path, scenario)
    assert isinstance(created, User)
    assert created.user_id is not None
    assert created.name == "Tony"
    assert created.age == 46
    assert fetched == created


def test_create_duplicate_email_raises_already_exists(tmp_path):
    async def scenario(repo):
        await repo.create_user(NewUser(name="Tony", age=46, email="tony@nomail.com"))
        with pytest.raises(UserAlreadyExistsError) as excinfo:
            await repo.create_user(NewUser(name="Other", age=1, email="tony@nomail.com"))
        async with repo.get_session() as s:
            rows = (await s.execute(select(DBUser))).scalars().all()
        return excinfo.value, rows

    err, rows = _run_with_repo(tmp_path, scenario)
    assert isinstance(err, OperationError)
    assert err.operation == "create"
    assert err.original is not None
    assert str(err) == "Unique constraint failed on the fields: (email)"
    assert len(rows) == 1


def test_create_missing_required_field_is_operation_error(tmp_path):
    async def scenario(repo):
        with pytest.raises(OperationError) as excinfo:
            await repo.create_user(NewUser(name=None, age=3, email="x@example.com"))
        return excinfo.value

    err = _run_with_repo(tmp_path, scenario)
    assert not isinstance(err, UserAlreadyExistsError)
    assert err.operation == "create"


def test_delete_returns_deleted_record_and_removes_row(tmp_path):
    async def scenario(repo):
        created = await repo.create_user(NewUser(name="Sally", age=30, email="sally@test3.com"))
        deleted = await repo.delete_user_by_email("sally@test3.com")
        remaining = await repo.get_user_by_email("sally@test3.com")
        return created, deleted, remaining

    created, deleted, remaining = _run_with_repo(tmp_path, scenario)
    assert deleted == created
    assert deleted.to_dict() == {"id": created.user_id, "name": "Sally", "age": 30, "email": "sally@test3.com"}
    assert remaining is None


def test_delete_missing_email_raises_not_found(tmp_path):
    async def scenario(repo):
        await repo.create_user(NewUser(name="Tony", age=46, email="tony@nomail.com"))
        with pytest.raises(UserNotFoundError) as excinfo:
            await repo.delete_user_by_email("sally@test3.com")
        still_there = await repo.get_user_by_email("tony@nomail.com")
        return excinfo.value, still_there

    err, still_there = _run_with_repo(tmp_path, scenario)
    assert err.operation == "delete"
    assert err.email == "sally@test3.com"
    assert str(err) == "Record to delete does not exist."
    assert still_there is not None
