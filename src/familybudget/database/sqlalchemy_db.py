"""SQLAlchemy implementation of the Database interface on in-memory SQLite."""

import logging
import threading
from contextlib import contextmanager
from datetime import date
from enum import Enum
from typing import Any, Callable, Iterator, Optional, TypeVar

from sqlalchemy.orm import Session

from familybudget.database.base import Database
from familybudget.database.models import (
    Family,
    FamilyMember,
    Notification,
    Payment,
    SavingsGoal,
    SavingsHistory,
    Transaction,
    User,
    create_session_factory,
)
from familybudget.database.mappers import (
    family_to_domain,
    family_member_to_domain,
    notification_to_domain,
    payment_to_domain,
    savings_goal_to_domain,
    savings_history_to_domain,
    transaction_to_domain,
    user_to_domain,
)
from familybudget.domain import entities as domain

logger = logging.getLogger(__name__)

E = TypeVar("E")


def _column_value(value: Any) -> Any:
    """Store enums by their string value."""
    return value.value if isinstance(value, Enum) else value


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface.

    The engine is private to the instance and lives in memory, so two
    instances never share data and nothing survives disconnect().
    """

    def __init__(self):
        self.session_factory = create_session_factory()
        self._session: Optional[Session] = None
        self._lock = threading.RLock()

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Close the session and drop the in-memory engine."""
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
            engine = self.session_factory.kw["bind"]
            engine.dispose()
            self.session_factory = create_session_factory()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            yield

    # Generic helpers shared by every collection
    def _get(self, model: type, record_id: int, to_domain: Callable[[Any], E]) -> Optional[E]:
        with self._lock:
            row = self._get_session().get(model, record_id)
            return None if row is None else to_domain(row)

    def _list(
        self,
        model: type,
        to_domain: Callable[[Any], E],
        *criteria,
        newest_first: bool = False,
    ) -> list[E]:
        with self._lock:
            query = self._get_session().query(model).filter(*criteria)
            if newest_first:
                query = query.order_by(model.created_at.desc(), model.id.desc())
            else:
                query = query.order_by(model.id)
            return [to_domain(row) for row in query.all()]

    def _create(self, model: type, to_domain: Callable[[Any], E], **values) -> E:
        with self._lock:
            session = self._get_session()
            row = model(**{key: _column_value(value) for key, value in values.items()})
            session.add(row)
            session.commit()
            logger.debug("created %s %d", model.__tablename__, row.id)
            return to_domain(row)

    def _update(
        self,
        model: type,
        record_id: int,
        update: domain.EntityUpdate,
        update_type: type[domain.EntityUpdate],
        to_domain: Callable[[Any], E],
    ) -> Optional[E]:
        if not isinstance(update, update_type):
            raise TypeError(
                f"{model.__tablename__} expects {update_type.__name__}, got {type(update).__name__}"
            )
        with self._lock:
            session = self._get_session()
            row = session.get(model, record_id)
            if row is None:
                return None
            for key, value in update.changes().items():
                setattr(row, key, _column_value(value))
            session.commit()
            return to_domain(row)

    def _delete(self, model: type, record_id: int) -> bool:
        with self._lock:
            session = self._get_session()
            row = session.get(model, record_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            logger.debug("deleted %s %d", model.__tablename__, record_id)
            return True

    # User operations
    def get_user(self, user_id: int) -> Optional[domain.User]:
        return self._get(User, user_id, user_to_domain)

    def get_user_by_username(self, username: str) -> Optional[domain.User]:
        return next(iter(self._list(User, user_to_domain, User.username == username)), None)

    def get_user_by_email(self, email: str) -> Optional[domain.User]:
        return next(iter(self._list(User, user_to_domain, User.email == email)), None)

    def create_user(
        self,
        username: str,
        password: str,
        email: str,
        role: domain.UserRole = domain.UserRole.USER,
        family_id: Optional[int] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> domain.User:
        return self._create(
            User,
            user_to_domain,
            username=username,
            password=password,
            email=email,
            role=domain.UserRole(role),
            family_id=family_id,
            first_name=first_name,
            last_name=last_name,
        )

    def update_user(self, user_id: int, update: domain.UserUpdate) -> Optional[domain.User]:
        return self._update(User, user_id, update, domain.UserUpdate, user_to_domain)

    def get_users_by_family_id(self, family_id: int) -> list[domain.User]:
        return self._list(User, user_to_domain, User.family_id == family_id)

    def get_users_by_role(self, family_id: int, role: domain.UserRole) -> list[domain.User]:
        return self._list(
            User,
            user_to_domain,
            User.family_id == family_id,
            User.role == _column_value(domain.UserRole(role)),
        )

    # Family operations
    def get_family(self, family_id: int) -> Optional[domain.Family]:
        return self._get(Family, family_id, family_to_domain)

    def create_family(self, name: str) -> domain.Family:
        return self._create(Family, family_to_domain, name=name)

    # Transaction operations
    def get_transactions(self, family_id: int) -> list[domain.Transaction]:
        return self._list(
            Transaction, transaction_to_domain, Transaction.family_id == family_id, newest_first=True
        )

    def get_transactions_by_user(self, user_id: int) -> list[domain.Transaction]:
        return self._list(
            Transaction, transaction_to_domain, Transaction.user_id == user_id, newest_first=True
        )

    def get_transaction(self, transaction_id: int) -> Optional[domain.Transaction]:
        return self._get(Transaction, transaction_id, transaction_to_domain)

    def create_transaction(
        self,
        date: date,
        description: str,
        amount: int,
        category: str,
        type: domain.TransactionType,
        user_id: int,
        family_id: int,
    ) -> domain.Transaction:
        return self._create(
            Transaction,
            transaction_to_domain,
            date=date,
            description=description,
            amount=amount,
            category=category,
            type=domain.TransactionType(type),
            user_id=user_id,
            family_id=family_id,
        )

    def update_transaction(
        self, transaction_id: int, update: domain.TransactionUpdate
    ) -> Optional[domain.Transaction]:
        return self._update(
            Transaction, transaction_id, update, domain.TransactionUpdate, transaction_to_domain
        )

    def delete_transaction(self, transaction_id: int) -> bool:
        return self._delete(Transaction, transaction_id)

    # Savings goal operations
    def get_savings_goals(self, family_id: int) -> list[domain.SavingsGoal]:
        return self._list(SavingsGoal, savings_goal_to_domain, SavingsGoal.family_id == family_id)

    def get_savings_goal(self, goal_id: int) -> Optional[domain.SavingsGoal]:
        return self._get(SavingsGoal, goal_id, savings_goal_to_domain)

    def create_savings_goal(
        self,
        name: str,
        target_amount: int,
        family_id: int,
        current_amount: int = 0,
        description: Optional[str] = None,
    ) -> domain.SavingsGoal:
        return self._create(
            SavingsGoal,
            savings_goal_to_domain,
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            description=description,
            family_id=family_id,
        )

    def update_savings_goal(
        self, goal_id: int, update: domain.SavingsGoalUpdate
    ) -> Optional[domain.SavingsGoal]:
        return self._update(SavingsGoal, goal_id, update, domain.SavingsGoalUpdate, savings_goal_to_domain)

    def delete_savings_goal(self, goal_id: int) -> bool:
        return self._delete(SavingsGoal, goal_id)

    # Savings history operations
    def get_savings_history(self, goal_id: int) -> list[domain.SavingsHistoryEntry]:
        return self._list(
            SavingsHistory, savings_history_to_domain, SavingsHistory.goal_id == goal_id, newest_first=True
        )

    def create_savings_history(
        self,
        amount: int,
        description: str,
        date: date,
        goal_id: int,
        type: domain.SavingsHistoryType,
        user_id: int,
    ) -> domain.SavingsHistoryEntry:
        return self._create(
            SavingsHistory,
            savings_history_to_domain,
            amount=amount,
            description=description,
            date=date,
            goal_id=goal_id,
            type=domain.SavingsHistoryType(type),
            user_id=user_id,
        )

    def delete_savings_history(self, goal_id: int) -> int:
        with self._lock:
            session = self._get_session()
            removed = session.query(SavingsHistory).filter(SavingsHistory.goal_id == goal_id).delete()
            session.commit()
            return removed

    # Family member operations
    def get_family_members(self, family_id: int) -> list[domain.FamilyMember]:
        return self._list(FamilyMember, family_member_to_domain, FamilyMember.family_id == family_id)

    def get_family_member(self, member_id: int) -> Optional[domain.FamilyMember]:
        return self._get(FamilyMember, member_id, family_member_to_domain)

    def create_family_member(
        self,
        name: str,
        relation: str,
        age: int,
        family_id: int,
        user_id: Optional[int] = None,
    ) -> domain.FamilyMember:
        return self._create(
            FamilyMember,
            family_member_to_domain,
            name=name,
            relation=relation,
            age=age,
            user_id=user_id,
            family_id=family_id,
        )

    def update_family_member(
        self, member_id: int, update: domain.FamilyMemberUpdate
    ) -> Optional[domain.FamilyMember]:
        return self._update(
            FamilyMember, member_id, update, domain.FamilyMemberUpdate, family_member_to_domain
        )

    def delete_family_member(self, member_id: int) -> bool:
        return self._delete(FamilyMember, member_id)

    # Payment operations
    def get_payments(self, family_id: int) -> list[domain.Payment]:
        return self._list(Payment, payment_to_domain, Payment.family_id == family_id)

    def get_payment(self, payment_id: int) -> Optional[domain.Payment]:
        return self._get(Payment, payment_id, payment_to_domain)

    def create_payment(
        self,
        name: str,
        amount: int,
        due_date: date,
        category: str,
        family_id: int,
        is_completed: bool = False,
    ) -> domain.Payment:
        return self._create(
            Payment,
            payment_to_domain,
            name=name,
            amount=amount,
            due_date=due_date,
            category=category,
            is_completed=is_completed,
            family_id=family_id,
        )

    def update_payment(self, payment_id: int, update: domain.PaymentUpdate) -> Optional[domain.Payment]:
        return self._update(Payment, payment_id, update, domain.PaymentUpdate, payment_to_domain)

    def delete_payment(self, payment_id: int) -> bool:
        return self._delete(Payment, payment_id)

    # Notification operations
    def get_notifications(self, user_id: int) -> list[domain.Notification]:
        return self._list(
            Notification, notification_to_domain, Notification.user_id == user_id, newest_first=True
        )

    def get_unread_notifications(self, user_id: int) -> list[domain.Notification]:
        return self._list(
            Notification,
            notification_to_domain,
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
            newest_first=True,
        )

    def get_notification(self, notification_id: int) -> Optional[domain.Notification]:
        return self._get(Notification, notification_id, notification_to_domain)

    def create_notification(
        self,
        title: str,
        message: str,
        user_id: int,
        is_read: bool = False,
    ) -> domain.Notification:
        return self._create(
            Notification,
            notification_to_domain,
            title=title,
            message=message,
            is_read=is_read,
            user_id=user_id,
        )

    def update_notification(
        self, notification_id: int, update: domain.NotificationUpdate
    ) -> Optional[domain.Notification]:
        return self._update(
            Notification, notification_id, update, domain.NotificationUpdate, notification_to_domain
        )
