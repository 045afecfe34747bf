from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NewUser:
    """Payload for creating a user."""

    name: str
    age: int
    email: str


class User:
    def __init__(self, user_id: Optional[int], name: str, age: int, email: str):
        self.user_id = user_id
        self.name = name
        self.age = age
        self.email = email

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "age": self.age, "email": self.email}

    def __eq__(self, other):
        if not isinstance(other, User):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"User(id={self.user_id}, name={self.name!r}, age={self.age}, email={self.email!r})"
