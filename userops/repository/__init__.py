from .users import UsersRepository

__all__ = ["UsersRepository"]
