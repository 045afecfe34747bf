from __future__ import annotations

import enum
import inspect
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TextIO

from userops.domain import NewUser, User
from userops.services.protocols import ConnectableClient, UserClient

logger = logging.getLogger(__name__)

NEW_USER = NewUser(name="Tony", age=46, email="tony@nomail.com")
DELETE_EMAIL = "sally@test3.com"


class RunState(enum.Enum):
    NOT_STARTED = "not_started"
    CREATING = "creating"
    DELETING = "deleting"
    REPORTING = "reporting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    DISCONNECTED = "disconnected"


@dataclass
class RunResult:
    deleted: Optional[User] = None
    error: Optional[Exception] = None
    states: List[RunState] = field(default_factory=lambda: [RunState.NOT_STARTED])

    @property
    def state(self) -> RunState:
        return self.states[-1]

    @property
    def succeeded(self) -> bool:
        return self.error is None and RunState.SUCCEEDED in self.states


class ScriptRunner:
    """Create one user, delete another, print the deleted record, disconnect.

    The steps run strictly in order. Any exception is reported once on `err`
    with its message verbatim; the client is disconnected on every path once
    it has been acquired.
    """

    def __init__(
        self,
        client_factory: Callable[[], UserClient],
        new_user: NewUser = NEW_USER,
        delete_email: str = DELETE_EMAIL,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        self.client_factory = client_factory
        self.new_user = new_user
        self.delete_email = delete_email
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    async def _acquire(self) -> UserClient:
        client = self.client_factory()
        if inspect.isawaitable(client):
            client = await client
        return client

    async def _connect(self, client: UserClient) -> None:
        if isinstance(client, ConnectableClient):
            await client.connect()

    async def run(self) -> RunResult:
        result = RunResult()
        client = None
        try:
            client = await self._acquire()
            await self._connect(client)

            result.states.append(RunState.CREATING)
            await client.create_user(self.new_user)

            result.states.append(RunState.DELETING)
            deleted = await client.delete_user_by_email(self.delete_email)

            result.states.append(RunState.REPORTING)
            print(deleted, file=self.out)
            result.deleted = deleted
            result.states.append(RunState.SUCCEEDED)
        except Exception as e:
            logger.debug("Run failed", exc_info=True)
            print(str(e), file=self.err)
            result.error = e
            result.states.append(RunState.FAILED)
        finally:
            if client is not None:
                await client.disconnect()
            result.states.append(RunState.DISCONNECTED)
        return result
