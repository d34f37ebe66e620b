"""Database package for the research node service."""

from .engine import create_engine_from_settings, create_sessionmaker
from .schema import Base, ItemRow, UserRow

__all__ = [
    "create_engine_from_settings",
    "create_sessionmaker",
    "Base",
    "ItemRow",
    "UserRow",
]
