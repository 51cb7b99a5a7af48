"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from familybudget.domain.entities import (
    Family,
    FamilyMember,
    FamilyMemberUpdate,
    Notification,
    NotificationUpdate,
    Payment,
    PaymentUpdate,
    SavingsGoal,
    SavingsGoalUpdate,
    SavingsHistoryEntry,
    SavingsHistoryType,
    Transaction,
    TransactionType,
    TransactionUpdate,
    User,
    UserRole,
    UserUpdate,
)


class Database(ABC):
    """Abstract record store for familybudget.

    Implementations keep every collection for the lifetime of the instance
    only. Lookups return None for unknown ids, deletes return whether a
    record was removed; no method raises for a missing record.
    """

    @abstractmethod
    def connect(self) -> None:
        """Prepare the store for use."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the store and discard its contents.

        This is a full reset: every collection is emptied and its id counter
        starts again at 1. Ids are unique only within one connected session.
        """
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Serialise a multi-step read-modify-write sequence.

        Re-entrant: nested use from the same thread is allowed.
        """
        pass

    # User operations
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def create_user(
        self,
        username: str,
        password: str,
        email: str,
        role: UserRole = UserRole.USER,
        family_id: Optional[int] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """Create a user. The password must already be hashed."""
        pass

    @abstractmethod
    def update_user(self, user_id: int, update: UserUpdate) -> Optional[User]:
        """Merge supplied fields onto a user."""
        pass

    @abstractmethod
    def get_users_by_family_id(self, family_id: int) -> list[User]:
        """List users of a family."""
        pass

    @abstractmethod
    def get_users_by_role(self, family_id: int, role: UserRole) -> list[User]:
        """List users of a family holding the given role."""
        pass

    # Family operations
    @abstractmethod
    def get_family(self, family_id: int) -> Optional[Family]:
        """Get family by ID."""
        pass

    @abstractmethod
    def create_family(self, name: str) -> Family:
        """Create a family."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transactions(self, family_id: int) -> list[Transaction]:
        """List a family's transactions, most recent first."""
        pass

    @abstractmethod
    def get_transactions_by_user(self, user_id: int) -> list[Transaction]:
        """List a user's transactions, most recent first."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def create_transaction(
        self,
        date: date,
        description: str,
        amount: int,
        category: str,
        type: TransactionType,
        user_id: int,
        family_id: int,
    ) -> Transaction:
        """Create a transaction."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, update: TransactionUpdate) -> Optional[Transaction]:
        """Merge supplied fields onto a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> bool:
        """Delete a transaction."""
        pass

    # Savings goal operations
    @abstractmethod
    def get_savings_goals(self, family_id: int) -> list[SavingsGoal]:
        """List a family's savings goals."""
        pass

    @abstractmethod
    def get_savings_goal(self, goal_id: int) -> Optional[SavingsGoal]:
        """Get savings goal by ID."""
        pass

    @abstractmethod
    def create_savings_goal(
        self,
        name: str,
        target_amount: int,
        family_id: int,
        current_amount: int = 0,
        description: Optional[str] = None,
    ) -> SavingsGoal:
        """Create a savings goal."""
        pass

    @abstractmethod
    def update_savings_goal(self, goal_id: int, update: SavingsGoalUpdate) -> Optional[SavingsGoal]:
        """Merge supplied fields onto a savings goal."""
        pass

    @abstractmethod
    def delete_savings_goal(self, goal_id: int) -> bool:
        """Delete a savings goal. History entries are left in place."""
        pass

    # Savings history operations
    @abstractmethod
    def get_savings_history(self, goal_id: int) -> list[SavingsHistoryEntry]:
        """List a goal's history entries, most recent first."""
        pass

    @abstractmethod
    def create_savings_history(
        self,
        amount: int,
        description: str,
        date: date,
        goal_id: int,
        type: SavingsHistoryType,
        user_id: int,
    ) -> SavingsHistoryEntry:
        """Append a savings history entry."""
        pass

    @abstractmethod
    def delete_savings_history(self, goal_id: int) -> int:
        """Delete all history entries of a goal. Returns how many were removed."""
        pass

    # Family member operations
    @abstractmethod
    def get_family_members(self, family_id: int) -> list[FamilyMember]:
        """List a family's members."""
        pass

    @abstractmethod
    def get_family_member(self, member_id: int) -> Optional[FamilyMember]:
        """Get family member by ID."""
        pass

    @abstractmethod
    def create_family_member(
        self,
        name: str,
        relation: str,
        age: int,
        family_id: int,
        user_id: Optional[int] = None,
    ) -> FamilyMember:
        """Create a family member."""
        pass

    @abstractmethod
    def update_family_member(self, member_id: int, update: FamilyMemberUpdate) -> Optional[FamilyMember]:
        """Merge supplied fields onto a family member."""
        pass

    @abstractmethod
    def delete_family_member(self, member_id: int) -> bool:
        """Delete a family member."""
        pass

    # Payment operations
    @abstractmethod
    def get_payments(self, family_id: int) -> list[Payment]:
        """List a family's mandatory payments."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID."""
        pass

    @abstractmethod
    def create_payment(
        self,
        name: str,
        amount: int,
        due_date: date,
        category: str,
        family_id: int,
        is_completed: bool = False,
    ) -> Payment:
        """Create a mandatory payment."""
        pass

    @abstractmethod
    def update_payment(self, payment_id: int, update: PaymentUpdate) -> Optional[Payment]:
        """Merge supplied fields onto a payment."""
        pass

    @abstractmethod
    def delete_payment(self, payment_id: int) -> bool:
        """Delete a payment."""
        pass

    # Notification operations
    @abstractmethod
    def get_notifications(self, user_id: int) -> list[Notification]:
        """List a user's notifications, most recent first."""
        pass

    @abstractmethod
    def get_unread_notifications(self, user_id: int) -> list[Notification]:
        """List a user's unread notifications, most recent first."""
        pass

    @abstractmethod
    def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID."""
        pass

    @abstractmethod
    def create_notification(
        self,
        title: str,
        message: str,
        user_id: int,
        is_read: bool = False,
    ) -> Notification:
        """Create a notification."""
        pass

    @abstractmethod
    def update_notification(self, notification_id: int, update: NotificationUpdate) -> Optional[Notification]:
        """Merge supplied fields onto a notification."""
        pass

    def mark_notification_as_read(self, notification_id: int) -> Optional[Notification]:
        """Set the read flag of a notification."""
        return self.update_notification(notification_id, NotificationUpdate(is_read=True))
