from .engine import make_engine, make_session_factory, init_orm
from .models import Base, User

__all__ = [
    "make_engine",
    "make_session_factory",
    "init_orm",
    "Base",
    "User",
]
