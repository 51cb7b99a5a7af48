"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from familybudget.domain.entities import (
    PaymentUpdate,
    SavingsGoal,
    TransactionType,
    TransactionUpdate,
    User,
    UserRole,
    UserUpdate,
)

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def _goal(current, target):
    return SavingsGoal(
        id=1,
        name="Vacation",
        target_amount=target,
        current_amount=current,
        description="",
        family_id=1,
        created_at=NOW,
    )


def test_goal_progress():
    """Test rounded progress in percent."""
    assert _goal(0, 1000).progress == 0
    assert _goal(333, 1000).progress == 33
    assert _goal(1500, 1000).progress == 150
    assert _goal(10, 0).progress == 0


def test_user_is_parent():
    """Test the parent role check."""
    user = User(
        id=1,
        username="anna",
        password="x",
        email="anna@example.com",
        role=UserRole.PARENT,
        family_id=1,
        first_name=None,
        last_name=None,
        created_at=NOW,
    )

    assert user.is_parent
    with pytest.raises(FrozenInstanceError):
        user.role = UserRole.USER


def test_update_changes_skip_unset_fields():
    """Test that only supplied fields are reported as changes."""
    assert TransactionUpdate().changes() == {}
    assert TransactionUpdate(amount=-5, type=TransactionType.EXPENSE).changes() == {
        "amount": -5,
        "type": TransactionType.EXPENSE,
    }
    assert PaymentUpdate(is_completed=False).changes() == {"is_completed": False}


def test_enums_compare_to_values():
    """Test that enum members equal their stored string values."""
    assert UserRole("parent") is UserRole.PARENT
    assert TransactionType.INCOME == "income"


def test_goal_progress_rounds_halves_up():
    """Test that an exact half percent rounds up."""
    assert _goal(1, 8).progress == 13
    assert _goal(5, 200).progress == 3


def test_updates_accept_raw_enum_values():
    """Test that enum fields given by value are stored as enum members."""
    assert UserUpdate(role="parent").role is UserRole.PARENT
    assert TransactionUpdate(type="income").changes() == {"type": TransactionType.INCOME}
    with pytest.raises(ValueError):
        UserUpdate(role="admin")
