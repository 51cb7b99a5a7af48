"""Demo family used by the CLI and for manual testing."""

import logging
from datetime import date, timedelta
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain.auth import AuthService
from familybudget.domain.entities import TransactionType, User
from familybudget.domain.family_member import FamilyMemberService
from familybudget.domain.payment import PaymentService
from familybudget.domain.savings import SavingsService
from familybudget.domain.transaction import TransactionService

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo-password"
DEMO_EMAIL = "demo@example.com"

# (days ago, description, amount, category, type)
DEMO_TRANSACTIONS = [
    (5, "Family cinema night", 2800, "Entertainment", TransactionType.EXPENSE),
    (3, "Salary", 65000, "Income", TransactionType.INCOME),
    (0, "Groceries", 5200, "Food", TransactionType.EXPENSE),
]


def seed_demo_data(db: Database, today: Optional[date] = None) -> User:
    """Populate a store with the demo family and return its parent user.

    Creates the parent (with the usual welcome notification), three recent
    transactions, a savings goal, a mandatory payment and two family members.
    """
    today = today or date.today()

    parent = AuthService(db).register(
        username=DEMO_USERNAME,
        password=DEMO_PASSWORD,
        email=DEMO_EMAIL,
        first_name="Alex",
        last_name="Smith",
        family_name="Smith family",
    )

    transactions = TransactionService(db)
    for days_ago, description, amount, category, txn_type in DEMO_TRANSACTIONS:
        transactions.create_transaction(
            parent,
            description=description,
            amount=amount,
            type=txn_type,
            category=category,
            date=today - timedelta(days=days_ago),
        )

    SavingsService(db).create_goal(
        parent,
        name="Summer vacation",
        target_amount=100000,
        current_amount=25000,
        description="Two weeks at the seaside",
    )
    PaymentService(db).create_payment(
        parent,
        name="Rent",
        amount=30000,
        due_date=today + timedelta(days=10),
        category="Housing",
    )

    members = FamilyMemberService(db)
    members.create_member(parent, name="Alex Smith", relation="Parent", age=38, user_id=parent.id)
    members.create_member(parent, name="Sam Smith", relation="Child", age=9)

    logger.info("seeded demo family %d", parent.family_id)
    return parent
