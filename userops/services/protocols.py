"""Protocol (interface) definitions for services."""

from typing import Protocol, runtime_checkable

from userops.domain import NewUser, User


class UserClient(Protocol):
    """The data-access operations the script runner depends on."""

    async def create_user(self, data: NewUser) -> User:
        """Insert a user and return the stored record."""
        ...

    async def delete_user_by_email(self, email: str) -> User:
        """Delete the user with `email` and return it as it was."""
        ...

    async def disconnect(self) -> None:
        """Release the underlying connection."""
        ...


@runtime_checkable
class ConnectableClient(Protocol):
    """Optional for a `UserClient`: opened by the runner before the first call."""

    async def connect(self) -> None:
        ...
