"""Transaction domain service."""

import logging
from datetime import date
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import (
    Transaction,
    TransactionType,
    TransactionUpdate,
    User,
)
from familybudget.domain.errors import NotFoundError, PermissionDeniedError
from familybudget.domain.rules import (
    require_amount,
    require_choice,
    require_family,
    require_same_family,
    require_text,
)

logger = logging.getLogger(__name__)


def signed_amount(amount: int, transaction_type: TransactionType) -> int:
    """Return the stored amount: negative for expenses, positive for income."""
    return -abs(amount) if transaction_type == TransactionType.EXPENSE else abs(amount)


class TransactionService:
    """Service for managing family transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_family_transactions(self, actor: User) -> list[Transaction]:
        """List all transactions of the actor's family, most recent first."""
        return self.db.get_transactions(require_family(actor))

    def list_user_transactions(self, actor: User) -> list[Transaction]:
        """List the actor's own transactions, most recent first."""
        return self.db.get_transactions_by_user(actor.id)

    def get_transaction(self, actor: User, transaction_id: int) -> Transaction:
        """Get a transaction of the actor's family.

        Raises:
            NotFoundError: If the transaction doesn't exist
            PermissionDeniedError: If it belongs to another family
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(errors.not_found("Transaction", transaction_id))
        require_same_family(actor, txn.family_id, "transaction", transaction_id)
        return txn

    def create_transaction(
        self,
        actor: User,
        description: str,
        amount: int,
        type: TransactionType | str,
        category: str,
        date: date,
    ) -> Transaction:
        """Record a transaction for the actor.

        Args:
            actor: User recording the transaction (becomes its owner)
            description: At least 3 characters
            amount: Positive amount; the sign is derived from the type
            type: "income" or "expense"
            category: Free-text category
            date: Transaction date

        Returns:
            The stored transaction

        Raises:
            ValidationError: If a field is invalid or the actor has no family
        """
        family_id = require_family(actor)
        transaction_type = require_choice(TransactionType, type, "transaction type")
        txn = self.db.create_transaction(
            date=date,
            description=require_text(description, "Description", 3),
            amount=signed_amount(require_amount(amount, "Amount"), transaction_type),
            category=require_text(category, "Category"),
            type=transaction_type,
            user_id=actor.id,
            family_id=family_id,
        )
        logger.info("user %d recorded %s %d (%d)", actor.id, transaction_type.value, txn.id, txn.amount)
        return txn

    def update_transaction(
        self,
        actor: User,
        transaction_id: int,
        description: Optional[str] = None,
        amount: Optional[int] = None,
        type: Optional[TransactionType | str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
    ) -> Transaction:
        """Update a transaction owned by the actor, or any family transaction for parents.

        The amount sign always follows the (possibly new) type.

        Raises:
            NotFoundError: If the transaction doesn't exist
            PermissionDeniedError: If the actor may not edit it
            ValidationError: If a supplied field is invalid
        """
        with self.db.atomic():
            txn = self._get_editable(actor, transaction_id)

            transaction_type = txn.type if type is None else require_choice(TransactionType, type, "transaction type")
            base_amount = abs(txn.amount) if amount is None else require_amount(amount, "Amount")
            update = TransactionUpdate(
                date=date,
                description=None if description is None else require_text(description, "Description", 3),
                amount=signed_amount(base_amount, transaction_type),
                category=None if category is None else require_text(category, "Category"),
                type=transaction_type,
            )
            updated = self.db.update_transaction(transaction_id, update)

        if updated is None:
            raise NotFoundError(errors.not_found("Transaction", transaction_id))
        return updated

    def delete_transaction(self, actor: User, transaction_id: int) -> None:
        """Delete a transaction owned by the actor, or any family transaction for parents.

        Raises:
            NotFoundError: If the transaction doesn't exist
            PermissionDeniedError: If the actor may not delete it
        """
        with self.db.atomic():
            self._get_editable(actor, transaction_id)
            if not self.db.delete_transaction(transaction_id):
                raise NotFoundError(errors.not_found("Transaction", transaction_id))
        logger.info("user %d deleted transaction %d", actor.id, transaction_id)

    def _get_editable(self, actor: User, transaction_id: int) -> Transaction:
        txn = self.get_transaction(actor, transaction_id)
        if not actor.is_parent and txn.user_id != actor.id:
            logger.warning("user %d denied edit of transaction %d", actor.id, transaction_id)
            raise PermissionDeniedError(
                f"Access denied: transaction {transaction_id} belongs to another user"
            )
        return txn
