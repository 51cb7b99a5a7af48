"""Savings goal domain service.

Deposits and withdrawals read the goal balance, write the new balance and
append a history entry. Each of these sequences runs under
``Database.atomic()`` so concurrent movements on one goal cannot interleave.
A failure between the balance write and the history append is not rolled
back.
"""

import logging
from datetime import date
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import (
    SavingsGoal,
    SavingsGoalUpdate,
    SavingsHistoryEntry,
    SavingsHistoryType,
    SavingsMovement,
    User,
)
from familybudget.domain.errors import InsufficientFundsError, NotFoundError
from familybudget.domain.rules import (
    require_amount,
    require_family,
    require_parent,
    require_same_family,
    require_text,
)

logger = logging.getLogger(__name__)


class SavingsService:
    """Service for savings goals and their balance history."""

    def __init__(self, db: Database):
        """Initialize savings service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_goals(self, actor: User) -> list[SavingsGoal]:
        """List the savings goals of the actor's family."""
        return self.db.get_savings_goals(require_family(actor))

    def get_goal(self, actor: User, goal_id: int) -> SavingsGoal:
        """Get a savings goal of the actor's family.

        Raises:
            NotFoundError: If the goal doesn't exist
            PermissionDeniedError: If it belongs to another family
        """
        goal = self.db.get_savings_goal(goal_id)
        if goal is None:
            raise NotFoundError(errors.not_found("Savings goal", goal_id))
        require_same_family(actor, goal.family_id, "savings goal", goal_id)
        return goal

    def create_goal(
        self,
        actor: User,
        name: str,
        target_amount: int,
        current_amount: int = 0,
        description: Optional[str] = None,
    ) -> SavingsGoal:
        """Create a savings goal for the actor's family (parents only).

        Raises:
            PermissionDeniedError: If the actor is not a parent
            ValidationError: If name, target or starting balance is invalid
        """
        family_id = require_parent(actor)
        goal = self.db.create_savings_goal(
            name=require_text(name, "Name", 3),
            target_amount=require_amount(target_amount, "Target amount"),
            current_amount=require_amount(current_amount, "Current amount", 0),
            description=(description or "").strip(),
            family_id=family_id,
        )
        logger.info("user %d created savings goal %d", actor.id, goal.id)
        return goal

    def update_goal(
        self,
        actor: User,
        goal_id: int,
        name: Optional[str] = None,
        target_amount: Optional[int] = None,
        description: Optional[str] = None,
    ) -> SavingsGoal:
        """Update name, target or description of a goal (parents only).

        The balance only changes through deposit() and withdraw().
        """
        require_parent(actor)
        with self.db.atomic():
            self.get_goal(actor, goal_id)
            update = SavingsGoalUpdate(
                name=None if name is None else require_text(name, "Name", 3),
                target_amount=None if target_amount is None else require_amount(target_amount, "Target amount"),
                description=None if description is None else description.strip(),
            )
            updated = self.db.update_savings_goal(goal_id, update)
        if updated is None:
            raise NotFoundError(errors.not_found("Savings goal", goal_id))
        return updated

    def delete_goal(self, actor: User, goal_id: int) -> None:
        """Delete a goal and its history (parents only)."""
        require_parent(actor)
        with self.db.atomic():
            self.get_goal(actor, goal_id)
            self.db.delete_savings_goal(goal_id)
            removed = self.db.delete_savings_history(goal_id)
        logger.info("user %d deleted savings goal %d with %d history entries", actor.id, goal_id, removed)

    def get_history(self, actor: User, goal_id: int) -> list[SavingsHistoryEntry]:
        """List the balance changes of a goal, most recent first."""
        self.get_goal(actor, goal_id)
        return self.db.get_savings_history(goal_id)

    def deposit(self, actor: User, goal_id: int, amount: int, description: str) -> SavingsMovement:
        """Add money to a goal. Any member of the goal's family may deposit.

        Raises:
            NotFoundError: If the goal doesn't exist
            PermissionDeniedError: If it belongs to another family
            ValidationError: If amount or description is invalid
        """
        amount = require_amount(amount, "Amount")
        description = require_text(description, "Description", 3)
        with self.db.atomic():
            goal = self.get_goal(actor, goal_id)
            movement = self._apply(
                actor, goal, goal.current_amount + amount, amount, description, SavingsHistoryType.DEPOSIT
            )
        logger.info("user %d deposited %d into savings goal %d", actor.id, amount, goal_id)
        return movement

    def withdraw(self, actor: User, goal_id: int, amount: int, description: str) -> SavingsMovement:
        """Take money out of a goal (parents only).

        Raises:
            PermissionDeniedError: If the actor is not a parent of the goal's family
            InsufficientFundsError: If the amount exceeds the goal balance
        """
        require_parent(actor)
        amount = require_amount(amount, "Amount")
        description = require_text(description, "Description", 3)
        with self.db.atomic():
            goal = self.get_goal(actor, goal_id)
            if goal.current_amount < amount:
                logger.warning("withdrawal of %d from savings goal %d rejected", amount, goal_id)
                raise InsufficientFundsError(errors.insufficient_funds(goal_id, goal.current_amount, amount))
            movement = self._apply(
                actor, goal, goal.current_amount - amount, amount, description, SavingsHistoryType.WITHDRAWAL
            )
        logger.info("user %d withdrew %d from savings goal %d", actor.id, amount, goal_id)
        return movement

    def _apply(
        self,
        actor: User,
        goal: SavingsGoal,
        new_balance: int,
        amount: int,
        description: str,
        kind: SavingsHistoryType,
    ) -> SavingsMovement:
        updated = self.db.update_savings_goal(goal.id, SavingsGoalUpdate(current_amount=new_balance))
        if updated is None:
            raise NotFoundError(errors.not_found("Savings goal", goal.id))
        history = self.db.create_savings_history(
            amount=amount,
            description=description,
            date=date.today(),
            goal_id=goal.id,
            type=kind,
            user_id=actor.id,
        )
        return SavingsMovement(goal=updated, history=history)
