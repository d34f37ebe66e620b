"""Database schema for the research node service.

The tables are provisioned outside this service; these mappings only describe
the columns the handlers read and write.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserRow(Base):
    """Login credentials and the opaque bearer token issued for them."""

    __tablename__ = "users"

    username = Column(String(255), primary_key=True)
    password = Column(String(255), nullable=False)
    token = Column(String(255), unique=True, index=True)


class ItemRow(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255))
    value = Column(String(255))

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "value": self.value}
