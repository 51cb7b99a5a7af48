"""Database factory functions for creating store instances."""

import os
from typing import Optional

from familybudget.database.base import Database
from familybudget.database.memory import MemoryDatabase
from familybudget.database.sqlalchemy_db import SQLAlchemyDatabase

BACKENDS = ("memory", "sqlalchemy")


def create_memory_database() -> MemoryDatabase:
    """Create a dictionary-backed store."""
    return MemoryDatabase()


def create_sqlalchemy_database() -> SQLAlchemyDatabase:
    """Create a store on a private in-memory SQLite engine."""
    return SQLAlchemyDatabase()


def create_database(backend: Optional[str] = None) -> Database:
    """Create a store instance.

    Args:
        backend: "memory" or "sqlalchemy". If None, checks the
            FAMILYBUDGET_BACKEND environment variable, then defaults to "memory".

    Returns:
        A connected, empty Database

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend is None:
        backend = os.environ.get("FAMILYBUDGET_BACKEND", "memory")

    backend = backend.strip().lower()
    if backend == "memory":
        db: Database = create_memory_database()
    elif backend == "sqlalchemy":
        db = create_sqlalchemy_database()
    else:
        raise ValueError(f"Unknown backend: '{backend}'. Supported backends: {', '.join(BACKENDS)}")

    db.connect()
    return db
