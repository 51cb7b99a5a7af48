"""Shared pytest fixtures for familybudget tests."""

import pytest

from familybudget.database.factories import create_database
from familybudget.domain.auth import AuthService
from familybudget.domain.budget import BudgetService
from familybudget.domain.entities import UserRole
from familybudget.domain.family_member import FamilyMemberService
from familybudget.domain.notification import NotificationService
from familybudget.domain.payment import PaymentService
from familybudget.domain.savings import SavingsService
from familybudget.domain.transaction import TransactionService
from familybudget.domain.user import UserService


@pytest.fixture(params=["memory", "sqlalchemy"])
def db(request):
    """Create an isolated, empty store for each backend."""
    database = create_database(request.param)
    yield database
    database.disconnect()


@pytest.fixture
def auth_service(db):
    """Create an AuthService on the test store."""
    return AuthService(db)


@pytest.fixture
def user_service(db):
    """Create a UserService on the test store."""
    return UserService(db)


@pytest.fixture
def transaction_service(db):
    """Create a TransactionService on the test store."""
    return TransactionService(db)


@pytest.fixture
def savings_service(db):
    """Create a SavingsService on the test store."""
    return SavingsService(db)


@pytest.fixture
def member_service(db):
    """Create a FamilyMemberService on the test store."""
    return FamilyMemberService(db)


@pytest.fixture
def payment_service(db):
    """Create a PaymentService on the test store."""
    return PaymentService(db)


@pytest.fixture
def notification_service(db):
    """Create a NotificationService on the test store."""
    return NotificationService(db)


@pytest.fixture
def budget_service(db):
    """Create a BudgetService on the test store."""
    return BudgetService(db)


@pytest.fixture
def parent(auth_service):
    """Register the founding parent of a family."""
    return auth_service.register(
        username="anna",
        password="secret-1",
        email="anna@example.com",
        first_name="Anna",
        last_name="Petrova",
    )


@pytest.fixture
def child(user_service, parent):
    """Add a regular (non-parent) user to the parent's family."""
    return user_service.add_family_user(
        parent,
        username="kolya",
        password="secret-2",
        email="kolya@example.com",
        first_name="Kolya",
        role=UserRole.USER,
    )


@pytest.fixture
def outsider(auth_service):
    """Register a parent of a different family."""
    return auth_service.register(
        username="boris",
        password="secret-3",
        email="boris@example.com",
        last_name="Ivanov",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
