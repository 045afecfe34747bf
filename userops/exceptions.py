"""Custom exceptions for userops operations."""
from typing import Optional


class OperationError(Exception):
    """Raised when a create or delete call against the database fails."""

    def __init__(self, operation: str, message: str, original: Optional[Exception] = None):
        self.operation = operation
        self.original = original
        super().__init__(message)


class UserAlreadyExistsError(OperationError):
    """Raised when a create violates the unique email constraint."""

    def __init__(self, email: str, original: Optional[Exception] = None):
        self.email = email
        super().__init__("create", "Unique constraint failed on the fields: (email)", original)


class UserNotFoundError(OperationError):
    """Raised when a delete matches no record."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("delete", "Record to delete does not exist.")
