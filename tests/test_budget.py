"""Tests for the budget summary and planning."""

from datetime import date

import pytest

from familybudget.domain.budget import DEFAULT_CATEGORY_ALLOCATIONS, DEFAULT_SPENDING_SHARES
from familybudget.domain.errors import PermissionDeniedError, ValidationError

TODAY = date(2024, 5, 20)


def _add(service, actor, amount, type, category, day=date(2024, 5, 15)):
    return service.create_transaction(
        actor, description=f"{category} entry", amount=amount, type=type, category=category, date=day
    )


def test_summary_of_empty_family(budget_service, parent):
    """Test the summary before anything is recorded."""
    summary = budget_service.budget_summary(parent, today=TODAY)

    assert summary.balance == 0
    assert summary.monthly_expenses == 0
    assert summary.savings_goal is None
    assert summary.needs_budget_planning is True
    assert summary.current_period == "May 2024"
    assert [c.name for c in summary.category_budgets] == list(DEFAULT_CATEGORY_ALLOCATIONS)
    assert all(c.spent == 0 for c in summary.category_budgets)


def test_summary_figures(budget_service, transaction_service, savings_service, parent, child):
    """Test balance, monthly expenses, savings goal and category spending."""
    _add(transaction_service, parent, 65000, "income", "Income")
    _add(transaction_service, parent, 5200, "expense", "Food")
    _add(transaction_service, child, 800, "expense", "Food")
    _add(transaction_service, parent, 3000, "expense", "Transport", day=date(2024, 4, 30))
    savings_service.create_goal(parent, name="Vacation", target_amount=1000, current_amount=250)
    savings_service.create_goal(parent, name="Car", target_amount=50000)

    summary = budget_service.budget_summary(parent, today=TODAY)

    assert summary.balance == 65000 - 5200 - 800 - 3000
    assert summary.monthly_expenses == 5200 + 800
    assert summary.savings_goal.name == "Vacation"
    assert summary.savings_goal.progress == 25
    spent = {c.name: c.spent for c in summary.category_budgets}
    assert spent["Food"] == 5200
    assert spent["Transport"] == 0


def test_spending_categories_default(budget_service, parent):
    """Test the fallback split without expenses."""
    assert budget_service.spending_categories(parent) == list(DEFAULT_SPENDING_SHARES)


def test_spending_categories(budget_service, transaction_service, parent):
    """Test rounded category percentages of the actor's expenses."""
    _add(transaction_service, parent, 300, "expense", "Food")
    _add(transaction_service, parent, 100, "expense", "Transport")
    _add(transaction_service, parent, 1000, "income", "Income")

    shares = {s.name: s.percentage for s in budget_service.spending_categories(parent)}

    assert shares == {"Food": 75, "Transport": 25}


def test_spending_categories_round_halves_up(budget_service, transaction_service, parent):
    """Test that a share of exactly 12.5 percent is shown as 13."""
    _add(transaction_service, parent, 1, "expense", "Snacks")
    _add(transaction_service, parent, 7, "expense", "Food")

    shares = {s.name: s.percentage for s in budget_service.spending_categories(parent)}

    assert shares == {"Snacks": 13, "Food": 88}


def test_plan_budget(budget_service, parent):
    """Test a valid budget plan."""
    plan = budget_service.plan_budget(parent, 50000, {"Food": 20000, "Transport": 10000}, today=TODAY)

    assert plan.total_budget == 50000
    assert plan.unallocated == 20000
    assert plan.period == "May 2024"


@pytest.mark.parametrize(
    "total,allocations",
    [
        (0, {"Food": 0}),
        (1000, {}),
        (1000, {"Food": -1}),
        (1000, {"Food": 800, "Transport": 300}),
    ],
)
def test_plan_budget_validation(budget_service, parent, total, allocations):
    """Test rejected budget plans."""
    with pytest.raises(ValidationError):
        budget_service.plan_budget(parent, total, allocations)


def test_plan_budget_requires_parent(budget_service, child):
    """Test that only parents plan budgets."""
    with pytest.raises(PermissionDeniedError):
        budget_service.plan_budget(child, 1000, {"Food": 500})
