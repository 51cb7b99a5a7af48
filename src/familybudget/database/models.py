"""SQLAlchemy models for the in-memory SQL store."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Family(Base):
    """Family model."""

    # AUTOINCREMENT stops SQLite from reusing the id of a deleted last row
    __tablename__ = "families"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class User(Base):
    """User model."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    username = Column(String, nullable=False)
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")
    # Foreign keys are plain integers: the store enforces no referential integrity
    family_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    category = Column(String, nullable=False)
    type = Column(String, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    family_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class SavingsGoal(Base):
    """Savings goal model."""

    __tablename__ = "savings_goals"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    target_amount = Column(Integer, nullable=False)
    current_amount = Column(Integer, nullable=False)
    description = Column(String, nullable=True)
    family_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class SavingsHistory(Base):
    """Savings history model."""

    __tablename__ = "savings_history"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    amount = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    goal_id = Column(Integer, nullable=False, index=True)
    type = Column(String, nullable=False)
    user_id = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class FamilyMember(Base):
    """Family member model."""

    __tablename__ = "family_members"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    relation = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    user_id = Column(Integer, nullable=True)
    family_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Payment(Base):
    """Mandatory payment model."""

    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    category = Column(String, nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    family_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


def create_session_factory(database_url: str = "sqlite://") -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory on a private in-memory engine.

    StaticPool keeps a single connection so every session sees the same
    in-memory SQLite database.
    """
    engine = create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
