"""Budget summary domain service.

Aggregates transactions and savings goals into the figures shown on the
family dashboard. Nothing here is stored; every call recomputes from the
current records.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Mapping, Optional

from familybudget.database.base import Database
from familybudget.domain.entities import (
    BudgetPlan,
    BudgetSummary,
    CategoryBudget,
    CategoryShare,
    SavingsGoalProgress,
    Transaction,
    TransactionType,
    User,
    whole_percent,
)
from familybudget.domain.errors import ValidationError
from familybudget.domain.rules import require_amount, require_family, require_parent
from familybudget.utils.date_parser import period_label

logger = logging.getLogger(__name__)

# Monthly allocation per category until a family plans its own budget
DEFAULT_CATEGORY_ALLOCATIONS: dict[str, int] = {
    "Food": 15000,
    "Transport": 8000,
    "Entertainment": 6000,
    "Mandatory payments": 20000,
    "Clothing": 5000,
    "Health": 4000,
    "Education": 3000,
    "Other": 4000,
}

# Shown when a user has not recorded any expense yet
DEFAULT_SPENDING_SHARES: tuple[CategoryShare, ...] = (
    CategoryShare(name="Food", percentage=35),
    CategoryShare(name="Transport", percentage=20),
    CategoryShare(name="Entertainment", percentage=15),
    CategoryShare(name="Mandatory payments", percentage=25),
    CategoryShare(name="Other", percentage=5),
)


def _in_period(txn: Transaction, today: date) -> bool:
    return txn.date.year == today.year and txn.date.month == today.month


def _expenses_by_category(transactions: list[Transaction]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for txn in transactions:
        if txn.type == TransactionType.EXPENSE:
            totals[txn.category] += abs(txn.amount)
    return totals


class BudgetService:
    """Service computing dashboard figures and monthly budget plans."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def budget_summary(self, actor: User, today: Optional[date] = None) -> BudgetSummary:
        """Summarise the actor's family budget.

        The balance covers every family transaction; expenses and category
        spending cover the current month only. Category spending is the
        actor's own.

        Args:
            actor: User viewing the dashboard
            today: Reference day for the current period (defaults to today)
        """
        family_id = require_family(actor)
        today = today or date.today()

        transactions = self.db.get_transactions(family_id)
        balance = sum(
            txn.amount if txn.type == TransactionType.INCOME else -abs(txn.amount)
            for txn in transactions
        )
        monthly_expenses = sum(
            abs(txn.amount)
            for txn in transactions
            if txn.type == TransactionType.EXPENSE and _in_period(txn, today)
        )

        savings_goal = None
        goals = self.db.get_savings_goals(family_id)
        if goals:
            goal = goals[0]
            savings_goal = SavingsGoalProgress(
                name=goal.name,
                target=goal.target_amount,
                current=goal.current_amount,
                progress=goal.progress,
            )

        own_spending = _expenses_by_category(
            [txn for txn in self.db.get_transactions_by_user(actor.id) if _in_period(txn, today)]
        )
        category_budgets = tuple(
            CategoryBudget(name=name, allocated=allocated, spent=own_spending.get(name, 0))
            for name, allocated in DEFAULT_CATEGORY_ALLOCATIONS.items()
        )

        return BudgetSummary(
            balance=balance,
            monthly_expenses=monthly_expenses,
            savings_goal=savings_goal,
            # Plans are not stored, so every period still needs planning
            needs_budget_planning=True,
            category_budgets=category_budgets,
            current_period=period_label(today),
        )

    def spending_categories(self, actor: User) -> list[CategoryShare]:
        """Split the actor's expenses by category, in rounded whole percent.

        Falls back to DEFAULT_SPENDING_SHARES when the actor has no expenses.
        """
        require_family(actor)
        totals = _expenses_by_category(self.db.get_transactions_by_user(actor.id))
        total = sum(totals.values())
        if not total:
            return list(DEFAULT_SPENDING_SHARES)
        return [
            CategoryShare(name=name, percentage=whole_percent(amount, total))
            for name, amount in totals.items()
        ]

    def plan_budget(
        self,
        actor: User,
        total_budget: int,
        category_allocations: Mapping[str, int],
        today: Optional[date] = None,
    ) -> BudgetPlan:
        """Check a monthly budget plan (parents only).

        Raises:
            PermissionDeniedError: If the actor is not a parent
            ValidationError: If the total is missing, an allocation is negative,
                or the allocations exceed the total
        """
        require_parent(actor)
        total_budget = require_amount(total_budget, "Total budget")
        if not category_allocations:
            raise ValidationError("At least one category allocation is required")

        allocations = {
            name: require_amount(amount, f"Allocation for '{name}'", 0)
            for name, amount in category_allocations.items()
        }
        allocated = sum(allocations.values())
        if allocated > total_budget:
            raise ValidationError(
                f"Allocations total {allocated} exceeds the budget of {total_budget}"
            )

        plan = BudgetPlan(
            total_budget=total_budget,
            category_allocations=allocations,
            period=period_label(today or date.today()),
            unallocated=total_budget - allocated,
        )
        logger.info("user %d planned a budget of %d for %s", actor.id, total_budget, plan.period)
        return plan
