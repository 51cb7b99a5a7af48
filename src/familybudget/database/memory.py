"""Dictionary-backed implementation of the Database interface."""

import dataclasses
import itertools
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, date, UTC
from typing import Callable, Generic, Iterator, Optional, TypeVar

from familybudget.database.base import Database
from familybudget.domain.entities import (
    EntityUpdate,
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

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Collection(Generic[T]):
    """Records of one entity type keyed by id, with a never-reused id counter."""

    def __init__(self, name: str, update_type: type[EntityUpdate]):
        self.name = name
        self.update_type = update_type
        self.records: dict[int, T] = {}
        self._ids = itertools.count(1)

    def insert(self, factory: Callable[..., T], **values) -> T:
        record = factory(id=next(self._ids), created_at=datetime.now(UTC), **values)
        self.records[record.id] = record
        logger.debug("created %s %d", self.name, record.id)
        return record

    def get(self, record_id: int) -> Optional[T]:
        return self.records.get(record_id)

    def filter(self, predicate: Callable[[T], bool], newest_first: bool = False) -> list[T]:
        matches = [r for r in list(self.records.values()) if predicate(r)]
        if newest_first:
            matches.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return matches

    def update(self, record_id: int, update: EntityUpdate) -> Optional[T]:
        if not isinstance(update, self.update_type):
            raise TypeError(
                f"{self.name} expects {self.update_type.__name__}, got {type(update).__name__}"
            )
        record = self.records.get(record_id)
        if record is None:
            return None
        merged = dataclasses.replace(record, **update.changes())
        self.records[record_id] = merged
        return merged

    def delete(self, record_id: int) -> bool:
        removed = self.records.pop(record_id, None) is not None
        if removed:
            logger.debug("deleted %s %d", self.name, record_id)
        return removed


class MemoryDatabase(Database):
    """In-process store holding every collection in dictionaries.

    Contents live as long as the instance; nothing is written anywhere.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._reset()

    def _reset(self) -> None:
        self.users: _Collection[User] = _Collection("user", UserUpdate)
        self.families: _Collection[Family] = _Collection("family", EntityUpdate)
        self.transactions: _Collection[Transaction] = _Collection("transaction", TransactionUpdate)
        self.savings_goals: _Collection[SavingsGoal] = _Collection("savings goal", SavingsGoalUpdate)
        # Savings history is append-only, so it has no update type of its own
        self.savings_history: _Collection[SavingsHistoryEntry] = _Collection(
            "savings history entry", EntityUpdate
        )
        self.family_members: _Collection[FamilyMember] = _Collection("family member", FamilyMemberUpdate)
        self.payments: _Collection[Payment] = _Collection("payment", PaymentUpdate)
        self.notifications: _Collection[Notification] = _Collection("notification", NotificationUpdate)

    def connect(self) -> None:
        """Connect to the database."""
        # Nothing to open
        pass

    def disconnect(self) -> None:
        """Drop all collections."""
        with self._lock:
            self._reset()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            yield

    # User operations
    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next(iter(self.users.filter(lambda u: u.username == username)), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next(iter(self.users.filter(lambda u: u.email == email)), None)

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
        with self._lock:
            return self.users.insert(
                User,
                username=username,
                password=password,
                email=email,
                role=UserRole(role),
                family_id=family_id,
                first_name=first_name,
                last_name=last_name,
            )

    def update_user(self, user_id: int, update: UserUpdate) -> Optional[User]:
        with self._lock:
            return self.users.update(user_id, update)

    def get_users_by_family_id(self, family_id: int) -> list[User]:
        return self.users.filter(lambda u: u.family_id == family_id)

    def get_users_by_role(self, family_id: int, role: UserRole) -> list[User]:
        return self.users.filter(lambda u: u.family_id == family_id and u.role == role)

    # Family operations
    def get_family(self, family_id: int) -> Optional[Family]:
        return self.families.get(family_id)

    def create_family(self, name: str) -> Family:
        with self._lock:
            return self.families.insert(Family, name=name)

    # Transaction operations
    def get_transactions(self, family_id: int) -> list[Transaction]:
        return self.transactions.filter(lambda t: t.family_id == family_id, newest_first=True)

    def get_transactions_by_user(self, user_id: int) -> list[Transaction]:
        return self.transactions.filter(lambda t: t.user_id == user_id, newest_first=True)

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.transactions.get(transaction_id)

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
        with self._lock:
            return self.transactions.insert(
                Transaction,
                date=date,
                description=description,
                amount=amount,
                category=category,
                type=TransactionType(type),
                user_id=user_id,
                family_id=family_id,
            )

    def update_transaction(self, transaction_id: int, update: TransactionUpdate) -> Optional[Transaction]:
        with self._lock:
            return self.transactions.update(transaction_id, update)

    def delete_transaction(self, transaction_id: int) -> bool:
        with self._lock:
            return self.transactions.delete(transaction_id)

    # Savings goal operations
    def get_savings_goals(self, family_id: int) -> list[SavingsGoal]:
        return self.savings_goals.filter(lambda g: g.family_id == family_id)

    def get_savings_goal(self, goal_id: int) -> Optional[SavingsGoal]:
        return self.savings_goals.get(goal_id)

    def create_savings_goal(
        self,
        name: str,
        target_amount: int,
        family_id: int,
        current_amount: int = 0,
        description: Optional[str] = None,
    ) -> SavingsGoal:
        with self._lock:
            return self.savings_goals.insert(
                SavingsGoal,
                name=name,
                target_amount=target_amount,
                current_amount=current_amount,
                description=description,
                family_id=family_id,
            )

    def update_savings_goal(self, goal_id: int, update: SavingsGoalUpdate) -> Optional[SavingsGoal]:
        with self._lock:
            return self.savings_goals.update(goal_id, update)

    def delete_savings_goal(self, goal_id: int) -> bool:
        with self._lock:
            return self.savings_goals.delete(goal_id)

    # Savings history operations
    def get_savings_history(self, goal_id: int) -> list[SavingsHistoryEntry]:
        return self.savings_history.filter(lambda h: h.goal_id == goal_id, newest_first=True)

    def create_savings_history(
        self,
        amount: int,
        description: str,
        date: date,
        goal_id: int,
        type: SavingsHistoryType,
        user_id: int,
    ) -> SavingsHistoryEntry:
        with self._lock:
            return self.savings_history.insert(
                SavingsHistoryEntry,
                amount=amount,
                description=description,
                date=date,
                goal_id=goal_id,
                type=SavingsHistoryType(type),
                user_id=user_id,
            )

    def delete_savings_history(self, goal_id: int) -> int:
        with self._lock:
            entry_ids = [h.id for h in self.savings_history.filter(lambda h: h.goal_id == goal_id)]
            for entry_id in entry_ids:
                self.savings_history.delete(entry_id)
            return len(entry_ids)

    # Family member operations
    def get_family_members(self, family_id: int) -> list[FamilyMember]:
        return self.family_members.filter(lambda m: m.family_id == family_id)

    def get_family_member(self, member_id: int) -> Optional[FamilyMember]:
        return self.family_members.get(member_id)

    def create_family_member(
        self,
        name: str,
        relation: str,
        age: int,
        family_id: int,
        user_id: Optional[int] = None,
    ) -> FamilyMember:
        with self._lock:
            return self.family_members.insert(
                FamilyMember,
                name=name,
                relation=relation,
                age=age,
                user_id=user_id,
                family_id=family_id,
            )

    def update_family_member(self, member_id: int, update: FamilyMemberUpdate) -> Optional[FamilyMember]:
        with self._lock:
            return self.family_members.update(member_id, update)

    def delete_family_member(self, member_id: int) -> bool:
        with self._lock:
            return self.family_members.delete(member_id)

    # Payment operations
    def get_payments(self, family_id: int) -> list[Payment]:
        return self.payments.filter(lambda p: p.family_id == family_id)

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self.payments.get(payment_id)

    def create_payment(
        self,
        name: str,
        amount: int,
        due_date: date,
        category: str,
        family_id: int,
        is_completed: bool = False,
    ) -> Payment:
        with self._lock:
            return self.payments.insert(
                Payment,
                name=name,
                amount=amount,
                due_date=due_date,
                category=category,
                is_completed=is_completed,
                family_id=family_id,
            )

    def update_payment(self, payment_id: int, update: PaymentUpdate) -> Optional[Payment]:
        with self._lock:
            return self.payments.update(payment_id, update)

    def delete_payment(self, payment_id: int) -> bool:
        with self._lock:
            return self.payments.delete(payment_id)

    # Notification operations
    def get_notifications(self, user_id: int) -> list[Notification]:
        return self.notifications.filter(lambda n: n.user_id == user_id, newest_first=True)

    def get_unread_notifications(self, user_id: int) -> list[Notification]:
        return self.notifications.filter(
            lambda n: n.user_id == user_id and not n.is_read, newest_first=True
        )

    def get_notification(self, notification_id: int) -> Optional[Notification]:
        return self.notifications.get(notification_id)

    def create_notification(
        self,
        title: str,
        message: str,
        user_id: int,
        is_read: bool = False,
    ) -> Notification:
        with self._lock:
            return self.notifications.insert(
                Notification,
                title=title,
                message=message,
                is_read=is_read,
                user_id=user_id,
            )

    def update_notification(self, notification_id: int, update: NotificationUpdate) -> Optional[Notification]:
        with self._lock:
            return self.notifications.update(notification_id, update)
