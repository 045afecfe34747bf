"""Domain objects for userops."""
from .user import User as User
from .user import NewUser as NewUser

__all__ = ["User", "NewUser"]
