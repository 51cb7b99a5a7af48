"""Tests for store factory functions."""

import pytest

from familybudget.database import create_database
from familybudget.database.memory import MemoryDatabase
from familybudget.database.sqlalchemy_db import SQLAlchemyDatabase


def test_default_backend_is_memory(monkeypatch):
    """Test the default backend without configuration."""
    monkeypatch.delenv("FAMILYBUDGET_BACKEND", raising=False)

    assert isinstance(create_database(), MemoryDatabase)


def test_backend_from_environment(monkeypatch):
    """Test FAMILYBUDGET_BACKEND."""
    monkeypatch.setenv("FAMILYBUDGET_BACKEND", "SQLAlchemy")

    db = create_database()
    assert isinstance(db, SQLAlchemyDatabase)
    db.disconnect()


def test_explicit_backend_wins(monkeypatch):
    """Test that an explicit backend overrides the environment."""
    monkeypatch.setenv("FAMILYBUDGET_BACKEND", "sqlalchemy")

    assert isinstance(create_database("memory"), MemoryDatabase)


def test_unknown_backend():
    """Test backend name validation."""
    with pytest.raises(ValueError, match="Unknown backend"):
        create_database("postgres")


@pytest.mark.parametrize("backend", ["memory", "sqlalchemy"])
def test_instances_do_not_share_data(backend):
    """Test that each store starts empty and stays private."""
    first = create_database(backend)
    second = create_database(backend)

    first.create_family("F1")

    assert second.get_family(1) is None
    first.disconnect()
    second.disconnect()
