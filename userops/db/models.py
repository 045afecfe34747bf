from __future__ import annotations


from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    age = Column(Integer, nullable=False)
    email = Column(Text, unique=True, nullable=False)
