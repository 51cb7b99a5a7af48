"""Mapper functions to convert SQLAlchemy models into domain entities.

SQLite does not keep timezone information, so timestamps read back from the
database are re-labelled as UTC (they are always written as UTC).
"""

from datetime import datetime, UTC

from familybudget.domain import entities as domain
from familybudget.database.models import (
    Family as ORMFamily,
    FamilyMember as ORMFamilyMember,
    Notification as ORMNotification,
    Payment as ORMPayment,
    SavingsGoal as ORMSavingsGoal,
    SavingsHistory as ORMSavingsHistory,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def family_to_domain(orm_family: ORMFamily) -> domain.Family:
    """Convert SQLAlchemy Family model to domain Family entity."""
    return domain.Family(
        id=orm_family.id,
        name=orm_family.name,
        created_at=_as_utc(orm_family.created_at),
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        password=orm_user.password,
        email=orm_user.email,
        role=domain.UserRole(orm_user.role),
        family_id=orm_user.family_id,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        created_at=_as_utc(orm_user.created_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        type=domain.TransactionType(orm_transaction.type),
        user_id=orm_transaction.user_id,
        family_id=orm_transaction.family_id,
        created_at=_as_utc(orm_transaction.created_at),
    )


def savings_goal_to_domain(orm_goal: ORMSavingsGoal) -> domain.SavingsGoal:
    """Convert SQLAlchemy SavingsGoal model to domain SavingsGoal entity."""
    return domain.SavingsGoal(
        id=orm_goal.id,
        name=orm_goal.name,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        description=orm_goal.description,
        family_id=orm_goal.family_id,
        created_at=_as_utc(orm_goal.created_at),
    )


def savings_history_to_domain(orm_entry: ORMSavingsHistory) -> domain.SavingsHistoryEntry:
    """Convert SQLAlchemy SavingsHistory model to domain SavingsHistoryEntry entity."""
    return domain.SavingsHistoryEntry(
        id=orm_entry.id,
        amount=orm_entry.amount,
        description=orm_entry.description,
        date=orm_entry.date,
        goal_id=orm_entry.goal_id,
        type=domain.SavingsHistoryType(orm_entry.type),
        user_id=orm_entry.user_id,
        created_at=_as_utc(orm_entry.created_at),
    )


def family_member_to_domain(orm_member: ORMFamilyMember) -> domain.FamilyMember:
    """Convert SQLAlchemy FamilyMember model to domain FamilyMember entity."""
    return domain.FamilyMember(
        id=orm_member.id,
        name=orm_member.name,
        relation=orm_member.relation,
        age=orm_member.age,
        user_id=orm_member.user_id,
        family_id=orm_member.family_id,
        created_at=_as_utc(orm_member.created_at),
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        name=orm_payment.name,
        amount=orm_payment.amount,
        due_date=orm_payment.due_date,
        category=orm_payment.category,
        is_completed=orm_payment.is_completed,
        family_id=orm_payment.family_id,
        created_at=_as_utc(orm_payment.created_at),
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    return domain.Notification(
        id=orm_notification.id,
        title=orm_notification.title,
        message=orm_notification.message,
        is_read=orm_notification.is_read,
        user_id=orm_notification.user_id,
        created_at=_as_utc(orm_notification.created_at),
    )
