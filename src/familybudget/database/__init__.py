"""Database layer for familybudget application."""

from familybudget.database.base import Database
from familybudget.database.factories import (
    create_database,
    create_memory_database,
    create_sqlalchemy_database,
)

__all__ = ["Database", "create_database", "create_memory_database", "create_sqlalchemy_database"]
