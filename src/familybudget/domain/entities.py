"""Domain model entities for familybudget.

These are pure data classes representing the records held by the store,
independent of whichever backend keeps them. Every entity carries an integer
id and a UTC creation timestamp; relationships are plain foreign-key ids.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional


def whole_percent(part: int, whole: int) -> int:
    """Return part as a percentage of whole, rounding halves up."""
    share = Decimal(part) * 100 / Decimal(whole)
    return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class UserRole(str, Enum):
    """Role of a user within a family."""

    PARENT = "parent"
    USER = "user"


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class SavingsHistoryType(str, Enum):
    """Kind of savings goal balance change."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass(frozen=True)
class Family:
    """Family domain entity: the tenancy boundary for budget records."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class User:
    """User domain entity.

    ``password`` holds the salted scrypt hash, never the plain text.
    """

    id: int
    username: str
    password: str
    email: str
    role: UserRole
    family_id: Optional[int]
    first_name: Optional[str]
    last_name: Optional[str]
    created_at: datetime

    @property
    def is_parent(self) -> bool:
        return self.role == UserRole.PARENT


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity. Expenses carry negative amounts."""

    id: int
    date: date
    description: str
    amount: int
    category: str
    type: TransactionType
    user_id: int
    family_id: int
    created_at: datetime


@dataclass(frozen=True)
class SavingsGoal:
    """Savings goal domain entity."""

    id: int
    name: str
    target_amount: int
    current_amount: int
    description: Optional[str]
    family_id: int
    created_at: datetime

    @property
    def progress(self) -> int:
        """Progress towards the target in whole percent."""
        if self.target_amount <= 0:
            return 0
        return whole_percent(self.current_amount, self.target_amount)


@dataclass(frozen=True)
class SavingsHistoryEntry:
    """Savings history domain entity (append-only audit of balance changes)."""

    id: int
    amount: int
    description: str
    date: date
    goal_id: int
    type: SavingsHistoryType
    user_id: int
    created_at: datetime


@dataclass(frozen=True)
class FamilyMember:
    """Family member domain entity, optionally linked to a user account."""

    id: int
    name: str
    relation: str
    age: int
    user_id: Optional[int]
    family_id: int
    created_at: datetime


@dataclass(frozen=True)
class Payment:
    """Mandatory payment domain entity."""

    id: int
    name: str
    amount: int
    due_date: date
    category: str
    is_completed: bool
    family_id: int
    created_at: datetime


@dataclass(frozen=True)
class Notification:
    """Notification domain entity."""

    id: int
    title: str
    message: str
    is_read: bool
    user_id: int
    created_at: datetime


# Update types list only the mutable fields of each entity. A field left at
# None is not touched by the store's shallow merge.


@dataclass(frozen=True)
class EntityUpdate:
    """Base class for partial updates."""

    def changes(self) -> dict[str, Any]:
        """Return the fields that were supplied (not None)."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class UserUpdate(EntityUpdate):
    password: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def __post_init__(self):
        if self.role is not None:
            object.__setattr__(self, "role", UserRole(self.role))


@dataclass(frozen=True)
class TransactionUpdate(EntityUpdate):
    date: Optional[date] = None
    description: Optional[str] = None
    amount: Optional[int] = None
    category: Optional[str] = None
    type: Optional[TransactionType] = None

    def __post_init__(self):
        if self.type is not None:
            object.__setattr__(self, "type", TransactionType(self.type))


@dataclass(frozen=True)
class SavingsGoalUpdate(EntityUpdate):
    name: Optional[str] = None
    target_amount: Optional[int] = None
    current_amount: Optional[int] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class FamilyMemberUpdate(EntityUpdate):
    name: Optional[str] = None
    relation: Optional[str] = None
    age: Optional[int] = None
    user_id: Optional[int] = None


@dataclass(frozen=True)
class PaymentUpdate(EntityUpdate):
    name: Optional[str] = None
    amount: Optional[int] = None
    due_date: Optional[date] = None
    category: Optional[str] = None
    is_completed: Optional[bool] = None


@dataclass(frozen=True)
class NotificationUpdate(EntityUpdate):
    title: Optional[str] = None
    message: Optional[str] = None
    is_read: Optional[bool] = None


# Results of composite service operations


@dataclass(frozen=True)
class SavingsMovement:
    """Goal state and history entry produced by a deposit or withdrawal."""

    goal: SavingsGoal
    history: SavingsHistoryEntry


@dataclass(frozen=True)
class CategoryBudget:
    """Allocated and spent amounts for one spending category."""

    name: str
    allocated: int
    spent: int


@dataclass(frozen=True)
class SavingsGoalProgress:
    """Condensed view of a savings goal for the budget summary."""

    name: str
    target: int
    current: int
    progress: int


@dataclass(frozen=True)
class BudgetSummary:
    """Dashboard summary of a family's budget."""

    balance: int
    monthly_expenses: int
    savings_goal: Optional[SavingsGoalProgress]
    needs_budget_planning: bool
    category_budgets: tuple[CategoryBudget, ...]
    current_period: str


@dataclass(frozen=True)
class CategoryShare:
    """Share of expenses spent in a category, in whole percent."""

    name: str
    percentage: int


@dataclass(frozen=True)
class BudgetPlan:
    """Monthly budget plan. Plans are computed, not stored."""

    total_budget: int
    category_allocations: dict[str, int]
    period: str
    unallocated: int
