"""CRUD operations module."""

from src.db.crud.users import UserStore

__all__ = [
    "UserStore",
]
