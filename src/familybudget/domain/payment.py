"""Mandatory payment domain service."""

import logging
from datetime import date
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import Payment, PaymentUpdate, User
from familybudget.domain.errors import NotFoundError
from familybudget.domain.rules import (
    require_amount,
    require_family,
    require_parent,
    require_same_family,
    require_text,
)

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for a family's recurring mandatory payments."""

    def __init__(self, db: Database):
        """Initialize payment service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_payments(self, actor: User) -> list[Payment]:
        """List the mandatory payments of the actor's family."""
        return self.db.get_payments(require_family(actor))

    def get_payment(self, actor: User, payment_id: int) -> Payment:
        """Get a payment of the actor's family."""
        payment = self.db.get_payment(payment_id)
        if payment is None:
            raise NotFoundError(errors.not_found("Payment", payment_id))
        require_same_family(actor, payment.family_id, "payment", payment_id)
        return payment

    def create_payment(
        self,
        actor: User,
        name: str,
        amount: int,
        due_date: date,
        category: str,
        is_completed: bool = False,
    ) -> Payment:
        """Create a mandatory payment (parents only).

        Raises:
            PermissionDeniedError: If the actor is not a parent
            ValidationError: If a field is invalid
        """
        family_id = require_parent(actor)
        payment = self.db.create_payment(
            name=require_text(name, "Name"),
            amount=require_amount(amount, "Amount"),
            due_date=due_date,
            category=require_text(category, "Category"),
            is_completed=bool(is_completed),
            family_id=family_id,
        )
        logger.info("user %d created payment %d", actor.id, payment.id)
        return payment

    def update_payment(
        self,
        actor: User,
        payment_id: int,
        name: Optional[str] = None,
        amount: Optional[int] = None,
        due_date: Optional[date] = None,
        category: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> Payment:
        """Update a payment (parents only)."""
        require_parent(actor)
        with self.db.atomic():
            self.get_payment(actor, payment_id)
            update = PaymentUpdate(
                name=None if name is None else require_text(name, "Name"),
                amount=None if amount is None else require_amount(amount, "Amount"),
                due_date=due_date,
                category=None if category is None else require_text(category, "Category"),
                is_completed=is_completed,
            )
            updated = self.db.update_payment(payment_id, update)
        if updated is None:
            raise NotFoundError(errors.not_found("Payment", payment_id))
        return updated

    def set_completed(self, actor: User, payment_id: int, completed: bool = True) -> Payment:
        """Mark a payment as paid, or reopen it."""
        return self.update_payment(actor, payment_id, is_completed=completed)

    def delete_payment(self, actor: User, payment_id: int) -> None:
        """Delete a payment (parents only)."""
        require_parent(actor)
        with self.db.atomic():
            self.get_payment(actor, payment_id)
            self.db.delete_payment(payment_id)
        logger.info("user %d deleted payment %d", actor.id, payment_id)
