"""Tests for savings goals, deposits and withdrawals."""

import threading
from datetime import date

import pytest

from familybudget.domain.entities import SavingsHistoryType
from familybudget.domain.errors import (
    InsufficientFundsError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


@pytest.fixture
def goal(savings_service, parent):
    """Create an empty savings goal for the parent's family."""
    return savings_service.create_goal(parent, name="Vacation", target_amount=1000)


def test_create_goal(goal, parent):
    """Test goal defaults."""
    assert goal.current_amount == 0
    assert goal.family_id == parent.family_id
    assert goal.progress == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "ab", "target_amount": 100},
        {"name": "Bike", "target_amount": 0},
        {"name": "Bike", "target_amount": 100, "current_amount": -1},
    ],
)
def test_create_goal_validation(savings_service, parent, kwargs):
    """Test goal field validation."""
    with pytest.raises(ValidationError):
        savings_service.create_goal(parent, **kwargs)


def test_create_goal_requires_parent(savings_service, child):
    """Test that only parents create goals."""
    with pytest.raises(PermissionDeniedError):
        savings_service.create_goal(child, name="Bike", target_amount=100)


def test_deposit_then_overdraw(savings_service, parent, goal):
    """Test a deposit followed by a withdrawal above the balance."""
    movement = savings_service.deposit(parent, goal.id, 400, "Birthday money")

    assert movement.goal.current_amount == 400
    assert movement.history.type == SavingsHistoryType.DEPOSIT
    assert movement.history.amount == 400
    assert movement.history.date == date.today()

    with pytest.raises(InsufficientFundsError):
        savings_service.withdraw(parent, goal.id, 1000, "Plane tickets")

    assert savings_service.get_goal(parent, goal.id).current_amount == 400
    assert len(savings_service.get_history(parent, goal.id)) == 1


def test_withdraw(savings_service, parent, goal):
    """Test a withdrawal within the balance."""
    savings_service.deposit(parent, goal.id, 400, "Birthday money")

    movement = savings_service.withdraw(parent, goal.id, 150, "Hotel deposit")

    assert movement.goal.current_amount == 250
    assert movement.history.type == SavingsHistoryType.WITHDRAWAL
    history = savings_service.get_history(parent, goal.id)
    assert [entry.type for entry in history] == [SavingsHistoryType.WITHDRAWAL, SavingsHistoryType.DEPOSIT]


def test_child_may_deposit_but_not_withdraw(savings_service, child, goal):
    """Test movement rights of regular users."""
    savings_service.deposit(child, goal.id, 50, "Pocket money")

    with pytest.raises(PermissionDeniedError):
        savings_service.withdraw(child, goal.id, 10, "Sweets")


def test_outsider_cannot_deposit(savings_service, outsider, goal):
    """Test that goals are scoped to the family."""
    with pytest.raises(PermissionDeniedError):
        savings_service.deposit(outsider, goal.id, 50, "Gift")


def test_deposit_validation(savings_service, parent, goal):
    """Test movement field validation."""
    with pytest.raises(ValidationError):
        savings_service.deposit(parent, goal.id, 0, "Nothing")
    with pytest.raises(ValidationError):
        savings_service.deposit(parent, goal.id, 10, "ab")
    with pytest.raises(NotFoundError):
        savings_service.deposit(parent, 999, 10, "Lost goal")


def test_update_goal(savings_service, parent, goal):
    """Test that update changes metadata but not the balance."""
    savings_service.deposit(parent, goal.id, 100, "Start")

    updated = savings_service.update_goal(parent, goal.id, name="Sea trip", target_amount=2000)

    assert updated.name == "Sea trip"
    assert updated.target_amount == 2000
    assert updated.current_amount == 100
    assert updated.progress == 5


def test_delete_goal_removes_history(savings_service, parent, goal, db):
    """Test that deleting a goal also deletes its history."""
    savings_service.deposit(parent, goal.id, 100, "Start")

    savings_service.delete_goal(parent, goal.id)

    assert savings_service.list_goals(parent) == []
    assert db.get_savings_history(goal.id) == []


def test_concurrent_deposits_are_not_lost(savings_service, parent, goal):
    """Test that parallel deposits all reach the balance."""
    threads = [
        threading.Thread(target=savings_service.deposit, args=(parent, goal.id, 10, "Coins"))
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert savings_service.get_goal(parent, goal.id).current_amount == 80
    assert len(savings_service.get_history(parent, goal.id)) == 8
