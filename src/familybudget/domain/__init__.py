"""Domain layer for familybudget application."""

_SERVICES = {
    "AuthService": "familybudget.domain.auth",
    "UserService": "familybudget.domain.user",
    "TransactionService": "familybudget.domain.transaction",
    "SavingsService": "familybudget.domain.savings",
    "FamilyMemberService": "familybudget.domain.family_member",
    "PaymentService": "familybudget.domain.payment",
    "NotificationService": "familybudget.domain.notification",
    "BudgetService": "familybudget.domain.budget",
}

__all__ = list(_SERVICES)


# Services are imported lazily: they depend on familybudget.database, which
# itself imports familybudget.domain.entities.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
